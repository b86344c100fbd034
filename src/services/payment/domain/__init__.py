from .entity import Payment as Payment
from .enum import PaymentMethod as PaymentMethod
from .enum import PaymentStatus as PaymentStatus
from .factory import PaymentDetails as PaymentDetails
from .factory import PaymentFactory as PaymentFactory
from .gateway import GatewayDecision as GatewayDecision
from .gateway import PaymentGateway as PaymentGateway
from .repository import PaymentRepository as PaymentRepository
from .value_object import CardDetails as CardDetails
from .value_object import MobileWalletDetails as MobileWalletDetails
from .value_object import PaymentMethodDetails as PaymentMethodDetails
from .value_object import TransactionId as TransactionId
