from abc import abstractmethod

from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentStatus
from services.shared.domain import BookingId, PaymentId, Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """決済リポジトリのインターフェース"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """決済を新規保存する（同一IDが存在すれば DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約に対する決済を新しい順に返す"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Payment]:
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        raise NotImplementedError

    @abstractmethod
    def update(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済を更新する

        expected_status を指定した場合、保存済みのステータスが一致しなければ
        OptimisticLockException。存在しなければ ResourceNotFoundException。
        """
        raise NotImplementedError

    @abstractmethod
    def delete(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済を削除する（条件は update と同じ）"""
        raise NotImplementedError
