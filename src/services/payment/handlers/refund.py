from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.container import get_container
from services.payment.handlers.request_models import RefundPaymentRequest
from services.payment.handlers.response_models import to_response
from services.shared.domain import PaymentId
from services.shared.domain.exception import DomainException
from services.shared.utils.responses import error_response, request_error_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """払い戻し Lambda Handler"""
    logger.info("Received refund payment request")

    payload = event.get("Payload", event)
    try:
        request = RefundPaymentRequest.model_validate(payload)
        payment = get_container().refund_payment.refund(
            PaymentId(value=request.payment_id)
        )
    except ValidationError as e:
        logger.warning("Invalid refund payment request", extra={"errors": e.errors()})
        return request_error_response(e)
    except DomainException as e:
        logger.warning("Refund payment rejected", extra={"error": e.to_dict()})
        return error_response(e)

    return to_response(payment)
