from .payment import Payment as Payment
