from fastapi import APIRouter, Depends, Query, status
from typing import List

from reservation.auth.dependencies import require_admin
from reservation.bookings.schemas import (
    Booking, BookingCreate, BookingList, BookingResult, BookingStatistics,
    CancellationResult
)
from reservation.dependencies import get_system, raise_for_error
from reservation.system import ReservationSystem

router = APIRouter()

@router.post("/", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
def book_ticket(
    request: BookingCreate,
    system: ReservationSystem = Depends(get_system)
):
    """Book a ticket; the booking is confirmed or waitlisted"""
    with system.lock:
        result = system.engine.book(
            name=request.name,
            age=request.age,
            gender=request.gender,
            train_number=request.train_number,
            class_type=request.class_type
        )
        if not result.success:
            raise_for_error(result.error, result.message)
        return result.model_copy(deep=True)

@router.get("/", response_model=BookingList)
def list_bookings(
    include_cancelled: bool = Query(True, description="Include cancelled bookings"),
    system: ReservationSystem = Depends(require_admin)
):
    """List bookings (admin only)"""
    with system.lock:
        bookings = system.engine.list_bookings(include_cancelled=include_cancelled)
        return BookingList(bookings=bookings, total=len(bookings)).model_copy(deep=True)

@router.get("/search", response_model=List[Booking])
def search_bookings(
    name: str = Query(..., min_length=1, description="Passenger name or part of it"),
    system: ReservationSystem = Depends(get_system)
):
    """Search active bookings by passenger name"""
    with system.lock:
        return [booking.model_copy() for booking in system.engine.search_by_name(name)]

@router.get("/statistics", response_model=BookingStatistics)
def booking_statistics(system: ReservationSystem = Depends(get_system)):
    """Booking counts by status"""
    with system.lock:
        return system.engine.statistics()

@router.get("/{pnr}", response_model=Booking)
def get_booking(
    pnr: str,
    system: ReservationSystem = Depends(get_system)
):
    """Get booking details by PNR"""
    with system.lock:
        result = system.engine.find(pnr)
        if not result.success:
            raise_for_error(result.error, result.message)
        return result.booking.model_copy()

@router.delete("/{pnr}", response_model=CancellationResult)
def cancel_booking(
    pnr: str,
    system: ReservationSystem = Depends(get_system)
):
    """Cancel a booking, promoting the next waitlisted passenger if a seat frees up"""
    with system.lock:
        result = system.engine.cancel(pnr)
        if not result.success:
            raise_for_error(result.error, result.message)
        return result.model_copy(deep=True)
