from services.payment.domain import Payment, PaymentRepository, PaymentStatus
from services.shared.domain import BookingId, PaymentId
from services.shared.domain.exception import ResourceNotFoundException


class PaymentQueryService:
    """決済の参照系ユースケース"""

    def __init__(self, repository: PaymentRepository) -> None:
        self._repository = repository

    def get_by_id(self, payment_id: PaymentId) -> Payment:
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")
        return payment

    def get_all(self) -> list[Payment]:
        return self._repository.find_all()

    def get_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        return self._repository.find_by_booking_id(booking_id)

    def get_by_status(self, status: PaymentStatus | str) -> list[Payment]:
        """ステータスで検索する（不明なステータス文字列は ValidationException）"""
        return self._repository.find_by_status(PaymentStatus.parse(status))
