from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.handlers.request_models import UpdateBookingRequest
from services.booking.handlers.response_models import to_response
from services.container import get_container
from services.shared.domain import BookingId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約変更 Lambda Handler"""
    logger.info("Received update booking request")

    payload = event.get("Payload", event)
    try:
        request = UpdateBookingRequest.model_validate(payload)
        booking = get_container().update_booking.update(
            booking_id=BookingId(value=request.booking_id),
            passenger_count=request.passenger_count,
            status=request.status,
            booking_extras=request.booking_extras,
            promo_code=request.promo_code,
        )
    except ValidationError as e:
        logger.warning("Invalid update booking request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Update booking rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response(booking)
