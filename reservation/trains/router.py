from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from reservation.auth.dependencies import require_admin
from reservation.dependencies import get_system, raise_for_error
from reservation.exceptions import RailwayError
from reservation.system import ReservationSystem
from reservation.trains.schemas import (
    AvailabilityResult, SeatConfigUpdate, TrainCreate, TrainSummary
)

router = APIRouter()

@router.get("/", response_model=List[TrainSummary])
def list_trains(system: ReservationSystem = Depends(get_system)):
    """List all trains with per-class occupancy"""
    with system.lock:
        return [train.summary() for train in system.engine.list_trains()]

@router.post("/", response_model=TrainSummary, status_code=status.HTTP_201_CREATED)
def add_train(
    request: TrainCreate,
    system: ReservationSystem = Depends(require_admin)
):
    """Add a train (admin only)"""
    with system.lock:
        try:
            for class_type in (request.seat_config or {}):
                system.trains.validate_class_type(class_type)
        except RailwayError as e:
            raise_for_error(e.kind, e.message)

        if not system.trains.add(request.train_number, request.train_name, request.seat_config):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Train with number '{request.train_number}' already exists."
            )
        return system.trains.get(request.train_number).summary()

@router.get("/{train_number}", response_model=TrainSummary)
def get_train(
    train_number: str,
    system: ReservationSystem = Depends(get_system)
):
    """Get a train by number"""
    with system.lock:
        try:
            return system.trains.get(train_number).summary()
        except RailwayError as e:
            raise_for_error(e.kind, e.message)

@router.get("/{train_number}/availability", response_model=AvailabilityResult)
def check_availability(
    train_number: str,
    class_type: str = Query(..., description="Seat class, e.g. AC or Sleeper"),
    system: ReservationSystem = Depends(get_system)
):
    """Seat availability for one class of a train"""
    with system.lock:
        result = system.engine.check_availability(train_number, class_type)
    if not result.success:
        raise_for_error(result.error, result.message)
    return result

@router.put("/{train_number}/classes/{class_type}", response_model=TrainSummary)
def configure_seats(
    train_number: str,
    class_type: str,
    update: SeatConfigUpdate,
    system: ReservationSystem = Depends(require_admin)
):
    """Reset a class to a new seat total, clearing its waitlist (admin only)"""
    with system.lock:
        try:
            train = system.trains.configure_seats(train_number, class_type, update.total_seats)
        except RailwayError as e:
            raise_for_error(e.kind, e.message)
        return train.summary()
