"""
Trains Module

- seating.py: per-class seat counters and FIFO waitlists (SeatClassState, Train)
- service.py: TrainRegistry, the owner of every train
- router.py: FastAPI endpoints for train listing, availability and seat configuration
- schemas.py: Pydantic models for availability snapshots and train requests
"""

from .seating import SeatClassState, Train, AC_CLASS, SLEEPER_CLASS
from .service import TrainRegistry
from .schemas import SeatAvailability, AvailabilityResult, TrainSummary, TrainCreate, SeatConfigUpdate

__all__ = [
    "SeatClassState",
    "Train",
    "AC_CLASS",
    "SLEEPER_CLASS",
    "TrainRegistry",
    "SeatAvailability",
    "AvailabilityResult",
    "TrainSummary",
    "TrainCreate",
    "SeatConfigUpdate"
]
