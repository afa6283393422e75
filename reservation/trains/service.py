import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from reservation.config import settings
from reservation.exceptions import InvalidClassTypeError, TrainNotFoundError
from reservation.trains.schemas import SeatAvailability
from reservation.trains.seating import Train

logger = logging.getLogger(__name__)


class TrainRegistry:
    """Owns every Train in the system, keyed by train number"""

    def __init__(
        self,
        valid_classes: Optional[Sequence[str]] = None,
        default_seat_config: Optional[Mapping[str, int]] = None,
    ):
        self._trains: Dict[str, Train] = {}
        self.valid_classes = list(valid_classes or settings.SEAT_CLASSES)
        self.default_seat_config = dict(default_seat_config or settings.default_seat_config)

    def add(
        self,
        train_number: str,
        train_name: str,
        seat_config: Optional[Mapping[str, int]] = None,
    ) -> bool:
        """Add a new train; returns False if the number is already taken"""
        if train_number in self._trains:
            return False
        config = dict(self.default_seat_config)
        if seat_config:
            config.update(seat_config)
        self._trains[train_number] = Train(train_number, train_name, config)
        logger.debug("Added train %s (%s) with %s", train_number, train_name, config)
        return True

    def get(self, train_number: str) -> Train:
        train = self._trains.get(train_number)
        if train is None:
            raise TrainNotFoundError(train_number)
        return train

    def exists(self, train_number: str) -> bool:
        return train_number in self._trains

    def all(self) -> List[Train]:
        return list(self._trains.values())

    def __len__(self) -> int:
        return len(self._trains)

    def validate_class_type(self, class_type: str) -> None:
        if class_type not in self.valid_classes:
            raise InvalidClassTypeError(class_type, self.valid_classes)

    def match_class_type(self, raw: str) -> str:
        """Map user input like ``sleeper`` onto the configured class name"""
        cleaned = (raw or "").strip()
        for class_type in self.valid_classes:
            if class_type.lower() == cleaned.lower():
                return class_type
        return cleaned

    def availability(self, train_number: str, class_type: str) -> SeatAvailability:
        self.validate_class_type(class_type)
        return self.get(train_number).availability(class_type)

    def configure_seats(self, train_number: str, class_type: str, total_seats: int) -> Train:
        """Reset a class to ``total_seats`` free seats, clearing its waitlist"""
        self.validate_class_type(class_type)
        train = self.get(train_number)

        booked = 0
        if class_type in train.classes():
            booked = train.booked_seats(class_type)
        dropped = train.set_seats_for_class(class_type, total_seats)

        if booked or dropped:
            logger.warning(
                "Reconfigured %s/%s to %d seats: discarded %d booked seats and %d waitlist entries",
                train_number, class_type, total_seats, booked, len(dropped),
            )
        else:
            logger.info("Reconfigured %s/%s to %d seats", train_number, class_type, total_seats)
        return train

    def replace_all(self, trains: Iterable[Train]) -> None:
        self._trains = {train.train_number: train for train in trains}
