import random

import pytest

from reservation.bookings.booking_service import BookingEngine
from reservation.bookings.registry import BookingRegistry
from reservation.bookings.schemas import BookingStatus
from reservation.exceptions import ErrorKind


class NoPnrRng:
    """Fails the test if a PNR is drawn"""

    def randint(self, low, high):
        raise AssertionError("PNR generated for a rejected booking")


def assert_seat_invariants(engine):
    for train in engine.trains.all():
        for class_type in train.classes():
            state = train.seat_class(class_type)
            assert 0 <= state.available <= state.total
            assert state.booked + state.available == state.total

            in_class = [
                b for b in engine.bookings.all()
                if b.train_number == train.train_number and b.class_type == class_type
            ]
            assert state.booked == len([b for b in in_class if b.is_confirmed])
            assert state.waitlist_length() == len([b for b in in_class if b.is_waitlisted])

    for booking in engine.bookings.all():
        assert booking.is_confirmed == (booking.seat_number is not None)


class TestBooking:

    def test_confirmed_booking_gets_first_seat(self, engine, trains):
        result = engine.book("John Doe", 30, "M", "T1", "AC")

        assert result.success and result.confirmed
        assert result.error is None
        assert result.booking.status == BookingStatus.CONFIRMED
        assert result.booking.seat_number == "A00"
        assert result.message == f"Booking confirmed! Your PNR: {result.booking.pnr}"
        assert trains.get("T1").available_seats("AC") == 0
        assert engine.bookings.get(result.booking.pnr) is result.booking

    def test_sleeper_labels_follow_booking_order(self, engine):
        first = engine.book("A", 30, "M", "T1", "Sleeper")
        second = engine.book("B", 31, "F", "T1", "Sleeper")
        assert first.booking.seat_number == "S00"
        assert second.booking.seat_number == "S01"

    def test_input_is_normalised(self, engine):
        result = engine.book("  Jane Smith ", 25, "female", "T1", "AC")
        assert result.booking.name == "Jane Smith"
        assert result.booking.gender == "F"

    def test_full_class_waitlists(self, engine, trains):
        engine.book("X", 30, "M", "T1", "AC")
        result = engine.book("Y", 28, "F", "T1", "AC")

        assert result.success and not result.confirmed
        assert result.booking.status == BookingStatus.WAITLISTED
        assert result.booking.seat_number is None
        assert result.waitlist_position == 1
        assert result.message == (
            f"Added to waitlist. Your PNR: {result.booking.pnr}. Waitlist position: 1"
        )
        assert trains.get("T1").waitlist_count("AC") == 1

    def test_waitlist_positions_grow(self, engine):
        engine.book("P1", 30, "M", "T1", "Sleeper")
        engine.book("P2", 30, "M", "T1", "Sleeper")
        third = engine.book("P3", 30, "M", "T1", "Sleeper")
        fourth = engine.book("P4", 30, "M", "T1", "Sleeper")

        assert third.waitlist_position == 1
        assert fourth.waitlist_position == 2
        assert engine.check_availability("T1", "Sleeper").availability.waitlist_count == 2

    @pytest.mark.parametrize("age", [0, 121, -5])
    def test_out_of_range_age_is_rejected_without_side_effects(self, trains, age):
        engine = BookingEngine(trains, BookingRegistry(rng=NoPnrRng()))

        result = engine.book("John Doe", age, "M", "T1", "AC")

        assert not result.success
        assert result.error == ErrorKind.VALIDATION
        assert "Age must be between 1 and 120." in result.message
        assert result.booking is None
        assert len(engine.bookings) == 0
        assert trains.get("T1").available_seats("AC") == 1

    @pytest.mark.parametrize("age", [1, 120])
    def test_age_bounds_are_inclusive(self, engine, age):
        assert engine.book("Edge Case", age, "M", "T1", "Sleeper").success

    @pytest.mark.parametrize("kwargs,reason", [
        ({"name": "   "}, "Passenger name cannot be empty."),
        ({"gender": "X"}, "Gender must be M/F or Male/Female."),
        ({"train_number": ""}, "Train number cannot be empty."),
        ({"train_number": "99999"}, "Train with number '99999' not found."),
        ({"class_type": "First"}, "Invalid class type 'First'"),
    ])
    def test_invalid_input(self, engine, kwargs, reason):
        params = {"name": "John Doe", "age": 30, "gender": "M", "train_number": "T1", "class_type": "AC"}
        params.update(kwargs)

        result = engine.book(**params)

        assert not result.success
        assert result.error == ErrorKind.VALIDATION
        assert reason in result.message
        assert len(engine.bookings) == 0


class TestCancellation:

    def test_cancel_promotes_waitlisted_passenger(self, engine, trains):
        x = engine.book("X", 30, "M", "T1", "AC").booking
        y = engine.book("Y", 28, "F", "T1", "AC").booking

        result = engine.cancel(x.pnr)

        assert result.success
        assert result.cancelled_booking is x
        assert x.status == BookingStatus.CANCELLED
        assert x.seat_number is None
        assert result.promoted_booking is y
        assert y.status == BookingStatus.CONFIRMED
        assert y.seat_number == "A00"
        assert trains.get("T1").available_seats("AC") == 0
        assert trains.get("T1").waitlist_count("AC") == 0
        assert result.message == (
            f"Ticket cancelled successfully. Passenger Y (PNR: {y.pnr}) has been promoted from waitlist."
        )

    def test_cancel_without_waitlist_frees_seat(self, engine, trains):
        x = engine.book("X", 30, "M", "T1", "AC").booking

        result = engine.cancel(x.pnr)

        assert result.success
        assert result.promoted_booking is None
        assert result.message == "Ticket cancelled successfully."
        assert trains.get("T1").available_seats("AC") == 1

    def test_promotion_is_fifo(self, engine):
        holder = engine.book("Holder", 30, "M", "T1", "AC").booking
        queued = [engine.book(f"W{i}", 30, "M", "T1", "AC").booking for i in range(3)]

        promoted = []
        current = holder
        for _ in queued:
            result = engine.cancel(current.pnr)
            promoted.append(result.promoted_booking)
            current = result.promoted_booking

        assert [b.pnr for b in promoted] == [b.pnr for b in queued]

    def test_cancelling_waitlisted_booking_leaves_seats_alone(self, engine, trains):
        x = engine.book("X", 30, "M", "T1", "AC").booking
        y = engine.book("Y", 30, "M", "T1", "AC").booking
        z = engine.book("Z", 30, "M", "T1", "AC").booking

        result = engine.cancel(y.pnr)

        assert result.success
        assert result.promoted_booking is None
        assert y.status == BookingStatus.CANCELLED
        assert trains.get("T1").available_seats("AC") == 0
        assert trains.get("T1").waitlist_count("AC") == 1

        # The cancelled passenger is skipped when the seat frees up
        assert engine.cancel(x.pnr).promoted_booking is z
        assert y.status == BookingStatus.CANCELLED

    def test_cancel_twice_is_idempotent(self, engine, trains):
        x = engine.book("X", 30, "M", "T1", "AC").booking
        engine.cancel(x.pnr)
        stats = engine.statistics()

        second = engine.cancel(x.pnr)
        third = engine.cancel(x.pnr)

        for result in (second, third):
            assert not result.success
            assert result.error == ErrorKind.ALREADY_CANCELLED
            assert result.message == "Ticket is already cancelled."
            assert result.promoted_booking is None
        assert engine.statistics() == stats
        assert trains.get("T1").available_seats("AC") == 1

    def test_cancel_unknown_pnr(self, engine):
        result = engine.cancel("PNR0000000")
        assert not result.success
        assert result.error == ErrorKind.BOOKING_NOT_FOUND
        assert "PNR0000000" in result.message

    def test_cancel_after_reconfiguration_does_not_release(self, engine, trains):
        x = engine.book("X", 30, "M", "T1", "AC").booking
        y = engine.book("Y", 30, "M", "T1", "AC").booking
        trains.configure_seats("T1", "AC", 3)

        result = engine.cancel(x.pnr)

        assert result.success
        assert result.promoted_booking is None
        assert trains.get("T1").available_seats("AC") == 3
        assert engine.cancel(y.pnr).success


class TestQueries:

    def test_check_availability(self, engine):
        engine.book("X", 30, "M", "T1", "Sleeper")
        result = engine.check_availability("T1", "Sleeper")

        assert result.success
        assert result.train_name == "Test Express"
        availability = result.availability
        assert (availability.total_seats, availability.booked_seats,
                availability.available_seats, availability.waitlist_count) == (2, 1, 1, 0)

    def test_check_availability_unknown_train(self, engine):
        result = engine.check_availability("99999", "AC")
        assert not result.success
        assert result.error == ErrorKind.TRAIN_NOT_FOUND

    def test_check_availability_invalid_class(self, engine):
        result = engine.check_availability("T1", "First")
        assert not result.success
        assert result.error == ErrorKind.INVALID_CLASS_TYPE

    def test_find(self, engine):
        booking = engine.book("X", 30, "M", "T1", "AC").booking
        assert engine.find(booking.pnr).booking is booking
        missing = engine.find("PNR0000000")
        assert not missing.success
        assert missing.error == ErrorKind.BOOKING_NOT_FOUND

    def test_search_and_listing(self, engine):
        john = engine.book("John Doe", 30, "M", "T1", "AC").booking
        engine.book("Jane Doe", 30, "F", "T1", "Sleeper")
        engine.cancel(john.pnr)

        assert [b.name for b in engine.search_by_name("doe")] == ["Jane Doe"]
        assert len(engine.list_bookings()) == 1
        assert len(engine.list_bookings(include_cancelled=True)) == 2


def test_invariants_hold_under_random_operations(trains, bookings):
    trains.add("T2", "Second", {"AC": 3, "Sleeper": 2})
    engine = BookingEngine(trains, bookings)
    rng = random.Random(2024)

    for step in range(300):
        live = [b for b in engine.bookings.all() if not b.is_cancelled]
        if live and rng.random() < 0.4:
            engine.cancel(rng.choice(live).pnr)
        else:
            engine.book(
                f"Passenger {step}",
                rng.randint(1, 120),
                rng.choice(["M", "F"]),
                rng.choice(["T1", "T2"]),
                rng.choice(["AC", "Sleeper"])
            )
        assert_seat_invariants(engine)
