from fastapi import APIRouter, Depends, HTTPException, status

from reservation.auth.dependencies import require_admin
from reservation.dependencies import raise_for_error
from reservation.exceptions import PersistenceError
from reservation.persistence.schemas import DataFileInfo, PersistenceSummary
from reservation.system import ReservationSystem

router = APIRouter()

@router.post("/save", response_model=PersistenceSummary)
def save_data(system: ReservationSystem = Depends(require_admin)):
    """Write the current state to the data file"""
    with system.lock:
        try:
            system.save()
        except PersistenceError as e:
            raise_for_error(e.kind, e.message)
        return PersistenceSummary(
            message="All data saved successfully!",
            trains=len(system.trains),
            bookings=len(system.bookings)
        )

@router.post("/load", response_model=PersistenceSummary)
def load_data(system: ReservationSystem = Depends(require_admin)):
    """Replace the current state with the saved state"""
    with system.lock:
        if not system.load():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No usable saved data found; current state kept."
            )
        return PersistenceSummary(
            message="All data loaded successfully!",
            trains=len(system.trains),
            bookings=len(system.bookings)
        )

@router.post("/backup")
def backup_data(system: ReservationSystem = Depends(require_admin)):
    """Copy the data file to its .backup sibling"""
    with system.lock:
        try:
            backup = system.persistence.create_backup()
        except PersistenceError as e:
            raise_for_error(e.kind, e.message)
    if backup is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data file to back up."
        )
    return {"message": "Backup created successfully!", "backup_file": str(backup)}

@router.get("/files", response_model=DataFileInfo)
def data_file_info(system: ReservationSystem = Depends(require_admin)):
    """Data file location and size"""
    with system.lock:
        return system.persistence.file_info()
