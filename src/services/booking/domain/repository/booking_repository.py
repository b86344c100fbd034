from abc import abstractmethod

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.shared.domain import BookingId, Repository, UserId


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリ

    搭乗者明細は予約集約と一緒に保存・削除される。
    update / delete は読み込んだ時点の version を条件に書き込む。
    """

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """搭乗者明細を含めて新規に永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        """ユーザーIDで検索"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        """ステータスで検索"""
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: Booking) -> None:
        """予約を更新する

        Raises:
            OptimisticLockException: 読み込み後に他の処理が更新していた
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking: Booking) -> None:
        """予約と搭乗者明細を削除する

        Raises:
            OptimisticLockException: 読み込み後に他の処理が更新していた
        """
        raise NotImplementedError
