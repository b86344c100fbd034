from .create_payment import CreatePaymentService as CreatePaymentService
from .delete_payment import DeletePaymentService as DeletePaymentService
from .process_payment import ProcessPaymentService as ProcessPaymentService
from .query_payments import PaymentQueryService as PaymentQueryService
from .refund_payment import RefundPaymentService as RefundPaymentService
from .update_payment import UpdatePaymentService as UpdatePaymentService
