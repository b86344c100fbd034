from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.handlers.request_models import DeleteBookingRequest
from services.booking.handlers.response_models import to_response
from services.container import get_container
from services.shared.domain import BookingId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約削除 Lambda Handler"""
    logger.info("Received delete booking request")

    payload = event.get("Payload", event)
    try:
        request = DeleteBookingRequest.model_validate(payload)
        get_container().delete_booking.delete(BookingId(value=request.booking_id))
    except ValidationError as e:
        logger.warning("Invalid delete booking request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Delete booking rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response()
