from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.handlers.request_models import CancelBookingRequest
from services.booking.handlers.response_models import to_response
from services.container import get_container
from services.shared.domain import BookingId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler"""
    logger.info("Received cancel booking request")

    payload = event.get("Payload", event)
    try:
        request = CancelBookingRequest.model_validate(payload)
        booking = get_container().cancel_booking.cancel(
            BookingId(value=request.booking_id)
        )
    except ValidationError as e:
        logger.warning("Invalid cancel booking request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Cancel booking rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response(booking)
