import logging
import random
import threading
from pathlib import Path
from typing import Optional

from reservation.auth.service import AdminAuthService
from reservation.bookings.booking_service import BookingEngine
from reservation.bookings.registry import BookingRegistry
from reservation.config import Settings, settings as default_settings
from reservation.exceptions import PersistenceError
from reservation.persistence.service import DataPersistence
from reservation.seed import seed_default_trains
from reservation.trains.service import TrainRegistry

logger = logging.getLogger(__name__)


class ReservationSystem:
    """Wires the registries, booking engine, persistence and admin auth together"""

    def __init__(
        self,
        config: Optional[Settings] = None,
        data_file: Optional[Path] = None,
        rng: Optional[random.Random] = None,
        seed_defaults: bool = True,
    ):
        self.config = config or default_settings
        self.trains = TrainRegistry(
            valid_classes=self.config.SEAT_CLASSES,
            default_seat_config=self.config.default_seat_config
        )
        self.bookings = BookingRegistry(rng=rng, pnr_prefix=self.config.PNR_PREFIX)
        self.engine = BookingEngine(self.trains, self.bookings)
        self.persistence = DataPersistence(data_file or self.config.DATA_FILE)
        self.auth = AdminAuthService(self.config.ADMIN_PASSWORD)
        self.lock = threading.Lock()

        if seed_defaults:
            seed_default_trains(self.trains)

    def load(self) -> bool:
        """
        Replace in-memory state with the saved state.

        Returns False and keeps the current state when there is nothing to
        load or the file cannot be read.
        """
        if not self.persistence.data_files_exist():
            logger.info("No existing data found. Starting with default configuration.")
            return False

        try:
            trains, bookings = self.persistence.load_all()
        except PersistenceError as e:
            logger.warning("%s Starting with default configuration.", e.message)
            return False

        if not trains:
            logger.warning("Saved data holds no trains. Starting with default configuration.")
            return False

        self.trains.replace_all(trains)
        self.bookings.replace_all(bookings)
        return True

    def save(self) -> None:
        self.persistence.save_all(self.trains.all(), self.bookings.all())
