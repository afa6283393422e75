from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from reservation.exceptions import ErrorKind


class SeatAvailability(BaseModel):
    """Occupancy snapshot for one class of one train"""
    class_type: str
    total_seats: int
    booked_seats: int
    available_seats: int
    waitlist_count: int

    def __str__(self) -> str:
        return (
            f"Total: {self.total_seats}, Booked: {self.booked_seats}, "
            f"Available: {self.available_seats}, Waitlist: {self.waitlist_count}"
        )


class AvailabilityResult(BaseModel):
    """Outcome of an availability query"""
    success: bool
    train_number: str
    train_name: Optional[str] = None
    class_type: str
    availability: Optional[SeatAvailability] = None
    error: Optional[ErrorKind] = None
    message: str = ""


class TrainSummary(BaseModel):
    train_number: str
    train_name: str
    classes: List[SeatAvailability]


class TrainCreate(BaseModel):
    train_number: str = Field(..., min_length=1)
    train_name: str = Field(..., min_length=1)
    seat_config: Optional[Dict[str, int]] = None

    @field_validator('seat_config')
    def validate_seat_config(cls, v):
        if v is not None:
            for class_type, seats in v.items():
                if seats < 0:
                    raise ValueError(f'Seat count for {class_type} cannot be negative')
        return v


class SeatConfigUpdate(BaseModel):
    total_seats: int = Field(..., ge=0, description="New total seat count for the class")
