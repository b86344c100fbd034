from .payment_gateway import GatewayDecision as GatewayDecision
from .payment_gateway import PaymentGateway as PaymentGateway
