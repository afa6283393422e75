from typing import NoReturn

from fastapi import HTTPException, Request, status

from reservation.exceptions import ErrorKind
from reservation.system import ReservationSystem

ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CLASS_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.TRAIN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_CANCELLED: status.HTTP_409_CONFLICT,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_system(request: Request) -> ReservationSystem:
    """
    The shared reservation system.

    Endpoints take ``system.lock`` in their own body so that the thread which
    acquires it is the one that releases it.
    """
    return request.app.state.system


def raise_for_error(kind: ErrorKind, message: str) -> NoReturn:
    raise HTTPException(
        status_code=ERROR_STATUS.get(kind, status.HTTP_400_BAD_REQUEST),
        detail=message
    )
