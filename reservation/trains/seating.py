from collections import deque
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from reservation.exceptions import InvalidClassTypeError, SeatAccountingError
from reservation.trains.schemas import SeatAvailability, TrainSummary

if TYPE_CHECKING:
    from reservation.bookings.schemas import Booking

AC_CLASS = "AC"
SLEEPER_CLASS = "Sleeper"

SEAT_PREFIXES = {AC_CLASS: "A", SLEEPER_CLASS: "S"}


class SeatClassState:
    """Seat counters and FIFO waitlist for one class of one train"""

    def __init__(self, total_seats: int, available_seats: Optional[int] = None):
        if total_seats < 0:
            raise ValueError("Total seats cannot be negative")
        if available_seats is None:
            available_seats = total_seats
        if not 0 <= available_seats <= total_seats:
            raise ValueError(
                f"Available seats must be between 0 and {total_seats}, got {available_seats}"
            )
        self._total = total_seats
        self._available = available_seats
        self._waitlist: deque = deque()

    @property
    def total(self) -> int:
        return self._total

    @property
    def available(self) -> int:
        return self._available

    @property
    def booked(self) -> int:
        return self._total - self._available

    def book(self) -> bool:
        """Take a seat if one is free"""
        if self._available > 0:
            self._available -= 1
            return True
        return False

    def release(self) -> Optional["Booking"]:
        """
        Free one booked seat and hand it to the head of the waitlist.

        When somebody is waiting the freed seat is re-occupied straight away,
        so the available count ends where it started. Returns the promoted
        booking, or None if the seat stays free.
        """
        if self._available >= self._total:
            raise SeatAccountingError(
                f"Cannot release a seat: all {self._total} seats are already available"
            )

        if self._waitlist:
            return self._waitlist.popleft()
        self._available += 1
        return None

    def enqueue_waitlist(self, booking: "Booking") -> int:
        self._waitlist.append(booking)
        return len(self._waitlist)

    def remove_from_waitlist(self, booking: "Booking") -> bool:
        for index, queued in enumerate(self._waitlist):
            if queued is booking:
                del self._waitlist[index]
                return True
        return False

    def waitlist_length(self) -> int:
        return len(self._waitlist)

    def waitlist(self) -> List["Booking"]:
        return list(self._waitlist)

    def reconfigure(self, total_seats: int) -> List["Booking"]:
        """Reset the class to ``total_seats`` free seats; returns the dropped waitlist"""
        if total_seats < 0:
            raise ValueError("Total seats cannot be negative")
        dropped = list(self._waitlist)
        self._total = total_seats
        self._available = total_seats
        self._waitlist.clear()
        return dropped

    def occupancy(self, class_type: str) -> SeatAvailability:
        return SeatAvailability(
            class_type=class_type,
            total_seats=self._total,
            booked_seats=self.booked,
            available_seats=self._available,
            waitlist_count=len(self._waitlist),
        )


class Train:
    """A train and its per-class seat state"""

    def __init__(
        self,
        train_number: str,
        train_name: str,
        seat_config: Optional[Mapping[str, int]] = None,
    ):
        self.train_number = train_number
        self.train_name = train_name
        self._classes: Dict[str, SeatClassState] = {}

        if seat_config is None:
            seat_config = {AC_CLASS: 20, SLEEPER_CLASS: 50}
        for class_type, total in seat_config.items():
            self._classes[class_type] = SeatClassState(total)

    def classes(self) -> List[str]:
        return list(self._classes)

    def seat_class(self, class_type: str) -> SeatClassState:
        state = self._classes.get(class_type)
        if state is None:
            raise InvalidClassTypeError(class_type, self.classes())
        return state

    def set_seats_for_class(self, class_type: str, total_seats: int) -> List["Booking"]:
        state = self._classes.get(class_type)
        if state is None:
            self._classes[class_type] = SeatClassState(total_seats)
            return []
        return state.reconfigure(total_seats)

    def restore_class(self, class_type: str, state: SeatClassState) -> None:
        self._classes[class_type] = state

    def book_seat(self, class_type: str) -> bool:
        return self.seat_class(class_type).book()

    def cancel_seat(self, class_type: str) -> Optional["Booking"]:
        return self.seat_class(class_type).release()

    def add_to_waitlist(self, booking: "Booking", class_type: str) -> int:
        return self.seat_class(class_type).enqueue_waitlist(booking)

    def remove_from_waitlist(self, booking: "Booking", class_type: str) -> bool:
        return self.seat_class(class_type).remove_from_waitlist(booking)

    @staticmethod
    def seat_label(class_type: str, seat_index: int) -> str:
        prefix = SEAT_PREFIXES.get(class_type, class_type[:1].upper())
        return f"{prefix}{seat_index:02d}"

    def total_seats(self, class_type: str) -> int:
        return self.seat_class(class_type).total

    def available_seats(self, class_type: str) -> int:
        return self.seat_class(class_type).available

    def booked_seats(self, class_type: str) -> int:
        return self.seat_class(class_type).booked

    def waitlist_count(self, class_type: str) -> int:
        return self.seat_class(class_type).waitlist_length()

    def availability(self, class_type: str) -> SeatAvailability:
        return self.seat_class(class_type).occupancy(class_type)

    def summary(self) -> TrainSummary:
        return TrainSummary(
            train_number=self.train_number,
            train_name=self.train_name,
            classes=[state.occupancy(name) for name, state in self._classes.items()],
        )

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{name} Seats: {state.booked}/{state.total}" for name, state in self._classes.items()
        )
        return f"Train(Number='{self.train_number}', Name='{self.train_name}', {counts})"
