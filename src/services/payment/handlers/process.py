from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.container import get_container
from services.payment.handlers.request_models import ProcessPaymentRequest
from services.payment.handlers.response_models import to_response
from services.shared.domain import BookingId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """決済処理のLambdaハンドラー"""
    logger.info("Received process payment request")

    payload = event.get("Payload", event)
    try:
        request = ProcessPaymentRequest.model_validate(payload)
        payment = get_container().process_payment.process(
            booking_id=BookingId(value=request.booking_id),
            amount=request.amount,
            method=request.method,
            method_fields=request.method_fields(),
        )
    except ValidationError as e:
        logger.warning("Invalid process payment request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Process payment rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response(payment)
