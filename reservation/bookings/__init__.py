"""
Booking & Cancellation Module

Key Components:
- booking_service.py: BookingEngine, booking/cancellation with waitlist promotion
- registry.py: BookingRegistry, PNR issuance and booking lookup/search
- router.py: FastAPI endpoints for booking, cancellation and lookup
- schemas.py: Pydantic models for booking records, requests and results

Booking lifecycle:
- A booking starts waitlisted and is confirmed at once when a seat is free
- Cancelling a confirmed booking frees its seat for the head of the waitlist
- Cancelled is terminal
"""

from .booking_service import BookingEngine
from .registry import BookingRegistry
from .schemas import (
    Booking, BookingStatus, BookingRequest, BookingCreate, BookingResult,
    CancellationResult, BookingLookupResult, BookingStatistics, BookingList
)

__all__ = [
    "BookingEngine",
    "BookingRegistry",
    "Booking",
    "BookingStatus",
    "BookingRequest",
    "BookingCreate",
    "BookingResult",
    "CancellationResult",
    "BookingLookupResult",
    "BookingStatistics",
    "BookingList"
]
