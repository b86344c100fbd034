import random
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from services.booking.domain import BookingStatus
from services.payment.domain import PaymentStatus
from services.shared.domain.exception import DomainException

EZ_CASH = {"mobile": "712345678"}


def assert_consistent(container, flight_id, initial_seats):
    """予約・決済・在庫の整合性を検証する

    - 空席数 + 有効な予約の人数 = 初期の空席数
    - 確定済みの予約には完了済みの決済が1件だけ紐付く
    - 完了済みの決済の予約は確定済み
    """
    bookings = container.booking_repository.find_all()
    payments = {p.id: p for p in container.payment_repository.find_all()}
    flight = container.flight_repository.find_by_id(flight_id)

    active = sum(b.passenger_count for b in bookings if not b.is_cancelled)
    assert flight.seats_available + active == initial_seats
    assert 0 <= flight.seats_available <= flight.capacity

    for booking in bookings:
        if booking.status == BookingStatus.CONFIRMED and booking.payment_id:
            assert payments[booking.payment_id].status == PaymentStatus.COMPLETED
    bookings_by_id = {b.id: b for b in bookings}
    for payment in payments.values():
        if payment.status == PaymentStatus.COMPLETED:
            booking = bookings_by_id[payment.booking_id]
            assert booking.status == BookingStatus.CONFIRMED
            assert booking.payment_id == payment.id


class TestConsistencyInvariants:
    def test_full_lifecycle(self, container, user, add_flight):
        flight = add_flight(seats_available=20)

        first = container.create_booking.create(user.id, flight.id, 3)
        second = container.create_booking.create(user.id, flight.id, 2)
        container.process_payment.process(first.id, Decimal("300"), "EZ_CASH", EZ_CASH)
        container.update_booking.update(second.id, passenger_count=4)
        assert_consistent(container, flight.id, 20)

        container.cancel_booking.cancel(first.id)
        container.delete_booking.delete(second.id)
        assert_consistent(container, flight.id, 20)

    def test_concurrent_operations_keep_invariants(self, container, user, add_flight):
        flight = add_flight(seats_available=15)
        bookings = [
            container.create_booking.create(user.id, flight.id, 2) for _ in range(4)
        ]
        barrier = threading.Barrier(8)

        def pay(booking):
            barrier.wait()
            return container.process_payment.process(
                booking.id, Decimal("200"), "EZ_CASH", EZ_CASH
            )

        def cancel(booking):
            barrier.wait()
            return container.cancel_booking.cancel(booking.id)

        tasks = [(pay, b) for b in bookings] + [(cancel, b) for b in bookings]
        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(fn, b) for fn, b in tasks]
            for future in futures:
                try:
                    future.result()
                except DomainException:
                    pass

        assert_consistent(container, flight.id, 15)
        # 支払いとキャンセルのどちらかが必ず勝つ
        for booking in container.booking_repository.find_all():
            assert booking.status in (BookingStatus.CONFIRMED, BookingStatus.CANCELLED)

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_random_operation_sequences(self, container, user, add_flight, seed):
        rng = random.Random(seed)
        flight = add_flight(seats_available=12)
        created = []

        for _ in range(40):
            operation = rng.choice(["create", "update", "pay", "cancel", "delete"])
            try:
                if operation == "create" or not created:
                    created.append(
                        container.create_booking.create(
                            user.id, flight.id, rng.randint(1, 4)
                        ).id
                    )
                    continue
                booking_id = rng.choice(created)
                if operation == "update":
                    container.update_booking.update(
                        booking_id, passenger_count=rng.randint(1, 5)
                    )
                elif operation == "pay":
                    container.process_payment.process(
                        booking_id, Decimal("100"), "EZ_CASH", EZ_CASH
                    )
                elif operation == "cancel":
                    container.cancel_booking.cancel(booking_id)
                else:
                    container.delete_booking.delete(booking_id)
            except DomainException:
                pass
            assert_consistent(container, flight.id, 12)
