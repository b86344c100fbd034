from .payment_repository import PaymentRepository as PaymentRepository
