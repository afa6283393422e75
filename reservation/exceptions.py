"""
Error types shared by the reservation core.

Registries raise these for lookups and validation; the booking engine turns
them into result objects carrying an ``ErrorKind`` so that front-ends never
have to catch them for routine outcomes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Reason a reservation operation did not complete"""
    VALIDATION = "validation"
    TRAIN_NOT_FOUND = "train_not_found"
    BOOKING_NOT_FOUND = "booking_not_found"
    INVALID_CLASS_TYPE = "invalid_class_type"
    ALREADY_CANCELLED = "already_cancelled"
    PERSISTENCE = "persistence"


class RailwayError(Exception):
    """Base exception for railway operations"""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookingValidationError(RailwayError):
    kind = ErrorKind.VALIDATION


class TrainNotFoundError(RailwayError):
    kind = ErrorKind.TRAIN_NOT_FOUND

    def __init__(self, train_number: str):
        super().__init__(f"Train with number '{train_number}' not found.")
        self.train_number = train_number


class BookingNotFoundError(RailwayError):
    kind = ErrorKind.BOOKING_NOT_FOUND

    def __init__(self, pnr: str):
        super().__init__(f"Passenger with PNR '{pnr}' not found.")
        self.pnr = pnr


class InvalidClassTypeError(RailwayError):
    kind = ErrorKind.INVALID_CLASS_TYPE

    def __init__(self, class_type: str, valid_classes=None):
        valid = ", ".join(valid_classes) if valid_classes else "AC, Sleeper"
        super().__init__(f"Invalid class type '{class_type}'. Valid types are: {valid}")
        self.class_type = class_type


class PersistenceError(RailwayError):
    kind = ErrorKind.PERSISTENCE


class SeatAccountingError(RuntimeError):
    """Seat counters were asked to do something no valid booking flow does"""
