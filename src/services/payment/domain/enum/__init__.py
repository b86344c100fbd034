from .payment_method import PaymentMethod as PaymentMethod
from .payment_status import PaymentStatus as PaymentStatus
