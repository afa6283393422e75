from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from reservation.dependencies import get_system
from reservation.system import ReservationSystem


def require_admin(
    x_admin_password: Optional[str] = Header(None),
    system: ReservationSystem = Depends(get_system)
) -> ReservationSystem:
    """Require the admin password for access"""
    if not system.auth.verify(x_admin_password):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Invalid admin password."
        )
    return system
