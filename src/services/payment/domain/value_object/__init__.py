from .payment_method_details import (
    CardDetails as CardDetails,
)
from .payment_method_details import (
    MobileWalletDetails as MobileWalletDetails,
)
from .payment_method_details import (
    PaymentMethodDetails as PaymentMethodDetails,
)
from .payment_method_details import (
    build_method_details as build_method_details,
)
from .payment_method_details import (
    luhn_checksum_valid as luhn_checksum_valid,
)
from .transaction_id import TransactionId as TransactionId
