import random
from typing import Dict, Iterable, List, Optional

from reservation.bookings.schemas import Booking, BookingStatistics, BookingStatus
from reservation.config import settings
from reservation.exceptions import BookingNotFoundError

PNR_MIN = 1_000_000
PNR_MAX = 9_999_999


class BookingRegistry:
    """Owns every Booking, keyed by PNR, and issues new PNRs"""

    def __init__(self, rng: Optional[random.Random] = None, pnr_prefix: Optional[str] = None):
        self._bookings: Dict[str, Booking] = {}
        self._rng = rng or random.Random()
        self.pnr_prefix = pnr_prefix if pnr_prefix is not None else settings.PNR_PREFIX

    def next_pnr(self) -> str:
        """Generate a PNR not used by any stored booking"""
        while True:
            pnr = f"{self.pnr_prefix}{self._rng.randint(PNR_MIN, PNR_MAX)}"
            if pnr not in self._bookings:
                return pnr

    def insert(self, booking: Booking) -> bool:
        if booking.pnr in self._bookings:
            return False
        self._bookings[booking.pnr] = booking
        return True

    def get(self, pnr: str) -> Booking:
        booking = self._bookings.get(pnr)
        if booking is None:
            raise BookingNotFoundError(pnr)
        return booking

    def exists(self, pnr: str) -> bool:
        return pnr in self._bookings

    def update(self, booking: Booking) -> None:
        self._bookings[booking.pnr] = booking

    def search_by_name(self, name: str, case_insensitive: bool = True) -> List[Booking]:
        """Active bookings whose passenger name contains ``name``"""
        needle = name.lower() if case_insensitive else name
        matches = []
        for booking in self._bookings.values():
            if booking.is_cancelled:
                continue
            haystack = booking.name.lower() if case_insensitive else booking.name
            if needle in haystack:
                matches.append(booking)
        return matches

    def all_active(self) -> List[Booking]:
        return [b for b in self._bookings.values() if not b.is_cancelled]

    def all(self) -> List[Booking]:
        return list(self._bookings.values())

    def __len__(self) -> int:
        return len(self._bookings)

    def statistics(self) -> BookingStatistics:
        stats = BookingStatistics(total=len(self._bookings))
        for booking in self._bookings.values():
            if booking.status == BookingStatus.CONFIRMED:
                stats.confirmed += 1
            elif booking.status == BookingStatus.WAITLISTED:
                stats.waitlisted += 1
            elif booking.status == BookingStatus.CANCELLED:
                stats.cancelled += 1
        return stats

    def replace_all(self, bookings: Iterable[Booking]) -> None:
        self._bookings = {booking.pnr: booking for booking in bookings}
