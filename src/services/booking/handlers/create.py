from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.domain import PassengerDetails
from services.booking.handlers.request_models import CreateBookingRequest
from services.booking.handlers.response_models import to_response
from services.container import get_container
from services.shared.domain import FlightId, UserId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約作成 Lambda Handler

    passengers があれば搭乗者明細付きの作成として扱う。
    """
    logger.info("Received create booking request")

    payload = event.get("Payload", event)
    try:
        request = CreateBookingRequest.model_validate(payload)
        service = get_container().create_booking
        user_id = UserId(value=request.user_id)
        flight_id = FlightId(value=request.flight_id)

        if request.passengers is not None:
            booking = service.create_with_passengers(
                user_id=user_id,
                flight_id=flight_id,
                passenger_count=request.passenger_count,
                passengers=[_to_passenger_details(p) for p in request.passengers],
                booking_extras=request.booking_extras,
                promo_code=request.promo_code,
            )
        else:
            booking = service.create(
                user_id=user_id,
                flight_id=flight_id,
                passenger_count=request.passenger_count,
                booking_extras=request.booking_extras,
                promo_code=request.promo_code,
                status=request.status,
            )
    except ValidationError as e:
        logger.warning("Invalid create booking request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Create booking rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response(booking)


def _to_passenger_details(passenger) -> PassengerDetails:
    return {
        "first_name": passenger.first_name,
        "last_name": passenger.last_name,
        "email": passenger.email,
        "date_of_birth": passenger.date_of_birth,
        "country": passenger.country,
        "phone": passenger.phone,
        "passport_number": passenger.passport_number,
        "passport_expiry": passenger.passport_expiry,
    }
