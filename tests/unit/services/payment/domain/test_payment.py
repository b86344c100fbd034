from decimal import Decimal

import pytest

from services.payment.domain import PaymentStatus, TransactionId
from services.shared.domain import Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ValidationException,
)


class TestPayment:
    def test_zero_amount_is_rejected(self, create_payment_entity):
        with pytest.raises(ValidationException, match="greater than 0"):
            create_payment_entity(amount=Decimal("0"))

    def test_complete_and_refund(self, create_payment_entity):
        payment = create_payment_entity()

        payment.change_status(PaymentStatus.COMPLETED)
        payment.refund()

        assert payment.status == PaymentStatus.REFUNDED

    @pytest.mark.parametrize(
        "status", [PaymentStatus.PENDING, PaymentStatus.FAILED, PaymentStatus.REFUNDED]
    )
    def test_only_completed_payments_can_be_refunded(
        self, create_payment_entity, status
    ):
        payment = create_payment_entity(status=status)
        with pytest.raises(BusinessRuleViolationException, match="Only completed"):
            payment.refund()
        assert payment.status == status

    @pytest.mark.parametrize(
        "current,target",
        [
            (PaymentStatus.PENDING, PaymentStatus.COMPLETED),
            (PaymentStatus.PENDING, PaymentStatus.FAILED),
            (PaymentStatus.FAILED, PaymentStatus.PENDING),
            (PaymentStatus.FAILED, PaymentStatus.COMPLETED),
            (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED),
        ],
    )
    def test_allowed_transitions(self, create_payment_entity, current, target):
        payment = create_payment_entity(status=current)
        payment.change_status(target)
        assert payment.status == target

    @pytest.mark.parametrize(
        "current,target",
        [
            (PaymentStatus.COMPLETED, PaymentStatus.PENDING),
            (PaymentStatus.COMPLETED, PaymentStatus.FAILED),
            (PaymentStatus.REFUNDED, PaymentStatus.COMPLETED),
            (PaymentStatus.PENDING, PaymentStatus.REFUNDED),
        ],
    )
    def test_forbidden_transitions(self, create_payment_entity, current, target):
        payment = create_payment_entity(status=current)
        with pytest.raises(BusinessRuleViolationException):
            payment.change_status(target)

    def test_same_status_is_noop(self, create_payment_entity):
        payment = create_payment_entity(status=PaymentStatus.REFUNDED)
        payment.change_status(PaymentStatus.REFUNDED)
        assert payment.status == PaymentStatus.REFUNDED

    def test_change_amount(self, create_payment_entity):
        payment = create_payment_entity()
        payment.change_amount(Money.of(300, "LKR"))
        assert payment.amount == Money.of(300, "LKR")
        with pytest.raises(ValidationException):
            payment.change_amount(Money.of(0, "LKR"))


class TestPaymentStatus:
    def test_parse_is_case_insensitive(self):
        assert PaymentStatus.parse(" completed ") == PaymentStatus.COMPLETED

    def test_parse_unknown(self):
        with pytest.raises(ValidationException, match="Invalid payment status"):
            PaymentStatus.parse("SETTLED")


class TestTransactionId:
    def test_generate_format(self):
        value = str(TransactionId.generate())
        assert value.startswith("TXN-")
        assert len(value) == 12
        assert value == value.upper()

    def test_normalizes_input(self):
        assert TransactionId("  txn-abc ").value == "TXN-ABC"

    def test_blank_is_rejected(self):
        with pytest.raises(ValidationException):
            TransactionId("   ")
