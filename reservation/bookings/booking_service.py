import logging
from typing import List

from pydantic import ValidationError

from reservation.bookings.registry import BookingRegistry
from reservation.bookings.schemas import (
    Booking, BookingLookupResult, BookingRequest, BookingResult,
    BookingStatistics, CancellationResult
)
from reservation.exceptions import (
    BookingNotFoundError, BookingValidationError, ErrorKind, RailwayError
)
from reservation.trains.schemas import AvailabilityResult
from reservation.trains.seating import Train
from reservation.trains.service import TrainRegistry

logger = logging.getLogger(__name__)


def _first_error_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    reason = error.get("ctx", {}).get("error")
    if reason is not None:
        return str(reason)
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}"


class BookingEngine:
    """
    Books and cancels tickets across the train and booking registries.

    The engine keeps no state of its own. Every operation either completes
    fully or leaves both registries untouched, and reports its outcome as a
    result object instead of raising for routine failures.
    """

    def __init__(self, trains: TrainRegistry, bookings: BookingRegistry):
        self.trains = trains
        self.bookings = bookings

    def book(
        self,
        name: str,
        age: int,
        gender: str,
        train_number: str,
        class_type: str,
    ) -> BookingResult:
        """Book a ticket, confirming a seat or joining the class waitlist"""

        try:
            request, train = self._validate_booking(name, age, gender, train_number, class_type)
        except RailwayError as e:
            logger.info("Booking rejected: %s", e.message)
            return BookingResult(
                success=False,
                error=ErrorKind.VALIDATION,
                message=f"Booking failed: {e.message}"
            )

        pnr = self.bookings.next_pnr()
        booking = Booking(
            pnr=pnr,
            name=request.name,
            age=request.age,
            gender=request.gender,
            train_number=request.train_number,
            class_type=request.class_type
        )

        if train.book_seat(request.class_type):
            booking.confirm(self._seat_label(train, request.class_type))
            self.bookings.insert(booking)
            logger.info(
                "Confirmed %s on %s/%s seat %s",
                pnr, train.train_number, request.class_type, booking.seat_number
            )
            return BookingResult(
                success=True,
                confirmed=True,
                booking=booking,
                message=f"Booking confirmed! Your PNR: {pnr}"
            )

        position = train.add_to_waitlist(booking, request.class_type)
        self.bookings.insert(booking)
        logger.info(
            "Waitlisted %s on %s/%s at position %d",
            pnr, train.train_number, request.class_type, position
        )
        return BookingResult(
            success=True,
            confirmed=False,
            booking=booking,
            waitlist_position=position,
            message=f"Added to waitlist. Your PNR: {pnr}. Waitlist position: {position}"
        )

    def cancel(self, pnr: str) -> CancellationResult:
        """Cancel a booking and promote the head of the waitlist into a freed seat"""

        try:
            booking = self.bookings.get(pnr)
        except BookingNotFoundError as e:
            return CancellationResult(
                success=False,
                error=e.kind,
                message=f"Cancellation failed: {e.message}"
            )

        if booking.is_cancelled:
            return CancellationResult(
                success=False,
                cancelled_booking=booking,
                error=ErrorKind.ALREADY_CANCELLED,
                message="Ticket is already cancelled."
            )

        try:
            train = self.trains.get(booking.train_number)
            train.seat_class(booking.class_type)
        except RailwayError as e:
            return CancellationResult(
                success=False,
                error=e.kind,
                message=f"Cancellation failed: {e.message}"
            )

        promoted = None
        message = "Ticket cancelled successfully."

        if booking.is_confirmed:
            if train.booked_seats(booking.class_type) == 0:
                # Occupancy was wiped by a seat reconfiguration
                logger.warning(
                    "Seat %s of %s no longer counted on %s/%s; nothing to release",
                    booking.seat_number, pnr, train.train_number, booking.class_type
                )
            else:
                promoted = train.cancel_seat(booking.class_type)

            if promoted is not None:
                promoted.confirm(self._seat_label(train, promoted.class_type))
                self.bookings.update(promoted)
                logger.info(
                    "Promoted %s from waitlist to seat %s", promoted.pnr, promoted.seat_number
                )
                message += (
                    f" Passenger {promoted.name} (PNR: {promoted.pnr})"
                    " has been promoted from waitlist."
                )
        else:
            train.remove_from_waitlist(booking, booking.class_type)

        booking.cancel()
        self.bookings.update(booking)
        logger.info("Cancelled %s on %s/%s", pnr, train.train_number, booking.class_type)

        return CancellationResult(
            success=True,
            cancelled_booking=booking,
            promoted_booking=promoted,
            message=message
        )

    def check_availability(self, train_number: str, class_type: str) -> AvailabilityResult:
        try:
            self.trains.validate_class_type(class_type)
            train = self.trains.get(train_number)
            availability = train.availability(class_type)
        except RailwayError as e:
            return AvailabilityResult(
                success=False,
                train_number=train_number,
                class_type=class_type,
                error=e.kind,
                message=f"Error checking availability: {e.message}"
            )

        return AvailabilityResult(
            success=True,
            train_number=train_number,
            train_name=train.train_name,
            class_type=class_type,
            availability=availability,
            message=str(availability)
        )

    def find(self, pnr: str) -> BookingLookupResult:
        try:
            booking = self.bookings.get(pnr)
        except BookingNotFoundError as e:
            return BookingLookupResult(success=False, error=e.kind, message=e.message)
        return BookingLookupResult(success=True, booking=booking)

    def search_by_name(self, name: str) -> List[Booking]:
        return self.bookings.search_by_name(name, case_insensitive=True)

    def list_bookings(self, include_cancelled: bool = False) -> List[Booking]:
        if include_cancelled:
            return self.bookings.all()
        return self.bookings.all_active()

    def list_trains(self) -> List[Train]:
        return self.trains.all()

    def statistics(self) -> BookingStatistics:
        return self.bookings.statistics()

    def _validate_booking(self, name, age, gender, train_number, class_type):
        try:
            request = BookingRequest(
                name=name,
                age=age,
                gender=gender,
                train_number=train_number,
                class_type=class_type
            )
        except ValidationError as e:
            raise BookingValidationError(_first_error_message(e)) from e

        train = self.trains.get(request.train_number)
        self.trains.validate_class_type(request.class_type)
        train.seat_class(request.class_type)
        return request, train

    @staticmethod
    def _seat_label(train: Train, class_type: str) -> str:
        # The confirming passenger is already included in booked_seats
        seat_index = train.booked_seats(class_type) - 1
        return Train.seat_label(class_type, seat_index)
