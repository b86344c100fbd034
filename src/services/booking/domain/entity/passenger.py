from datetime import date

from services.booking.domain.value_object import PassengerId
from services.shared.domain import Entity


class Passenger(Entity[PassengerId]):
    """搭乗者（予約の明細行）

    予約集約に所有され、予約の削除とともに削除される。
    """

    def __init__(
        self,
        id: PassengerId,
        first_name: str,
        last_name: str,
        email: str,
        date_of_birth: date,
        country: str,
        phone: str | None = None,
        passport_number: str | None = None,
        passport_expiry: date | None = None,
    ) -> None:
        super().__init__(id)
        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._date_of_birth = date_of_birth
        self._country = country
        self._phone = phone
        self._passport_number = passport_number
        self._passport_expiry = passport_expiry

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def date_of_birth(self) -> date:
        return self._date_of_birth

    @property
    def country(self) -> str:
        return self._country

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def passport_number(self) -> str | None:
        return self._passport_number

    @property
    def passport_expiry(self) -> date | None:
        return self._passport_expiry
