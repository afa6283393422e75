from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from reservation.exceptions import ErrorKind

GENDER_ALIASES = {"M": "M", "MALE": "M", "F": "F", "FEMALE": "F"}
MIN_AGE = 1
MAX_AGE = 120


class BookingStatus(str, Enum):
    """Booking status enumeration"""
    CONFIRMED = "confirmed"
    WAITLISTED = "waitlisted"
    CANCELLED = "cancelled"


class Booking(BaseModel):
    """A single passenger's ticket and its lifecycle state"""
    pnr: str
    name: str
    age: int
    gender: str
    train_number: str
    class_type: str
    seat_number: Optional[str] = None
    status: BookingStatus = BookingStatus.WAITLISTED
    booked_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_seat_matches_status(self):
        if self.status == BookingStatus.CONFIRMED and not self.seat_number:
            raise ValueError("A confirmed booking must have a seat number")
        if self.status != BookingStatus.CONFIRMED and self.seat_number:
            raise ValueError(f"A {self.status.value} booking cannot hold a seat number")
        return self

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def is_waitlisted(self) -> bool:
        return self.status == BookingStatus.WAITLISTED

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    def confirm(self, seat_number: str) -> None:
        if self.is_cancelled:
            raise ValueError(f"Booking {self.pnr} is cancelled and cannot be confirmed")
        self.status = BookingStatus.CONFIRMED
        self.seat_number = seat_number

    def cancel(self) -> None:
        self.status = BookingStatus.CANCELLED
        self.seat_number = None


# Request Models
class BookingRequest(BaseModel):
    """Validated booking input"""
    name: str
    age: int
    gender: str
    train_number: str
    class_type: str

    @field_validator('name')
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Passenger name cannot be empty.')
        return v.strip()

    @field_validator('age')
    def validate_age(cls, v):
        if v < MIN_AGE or v > MAX_AGE:
            raise ValueError(f'Age must be between {MIN_AGE} and {MAX_AGE}.')
        return v

    @field_validator('gender')
    def validate_gender(cls, v):
        normalized = GENDER_ALIASES.get((v or "").strip().upper())
        if normalized is None:
            raise ValueError('Gender must be M/F or Male/Female.')
        return normalized

    @field_validator('train_number')
    def validate_train_number(cls, v):
        if not v or not v.strip():
            raise ValueError('Train number cannot be empty.')
        return v.strip()


class BookingCreate(BaseModel):
    """Request body for booking a ticket over HTTP"""
    name: str
    age: int
    gender: str
    train_number: str
    class_type: str


# Response Models
class BookingResult(BaseModel):
    """Outcome of a booking attempt"""
    success: bool
    confirmed: bool = False
    booking: Optional[Booking] = None
    waitlist_position: Optional[int] = None
    error: Optional[ErrorKind] = None
    message: str


class CancellationResult(BaseModel):
    """Outcome of a cancellation attempt"""
    success: bool
    cancelled_booking: Optional[Booking] = None
    promoted_booking: Optional[Booking] = None
    error: Optional[ErrorKind] = None
    message: str


class BookingLookupResult(BaseModel):
    success: bool
    booking: Optional[Booking] = None
    error: Optional[ErrorKind] = None
    message: str = ""


class BookingStatistics(BaseModel):
    """Counts of bookings by status"""
    total: int = 0
    confirmed: int = 0
    waitlisted: int = 0
    cancelled: int = 0

    def summary(self) -> str:
        return (
            f"Total Bookings: {self.total} | Confirmed: {self.confirmed} | "
            f"Waitlisted: {self.waitlisted} | Cancelled: {self.cancelled}"
        )


class BookingList(BaseModel):
    bookings: List[Booking]
    total: int
