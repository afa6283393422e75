import logging
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from reservation.bookings.schemas import Booking, BookingStatus
from reservation.database import Base, create_db_engine, create_session_factory, sqlite_url
from reservation.exceptions import PersistenceError
from reservation.models import PassengerRecord, SeatClassRecord, TrainRecord
from reservation.persistence.schemas import DataFileInfo
from reservation.trains.seating import SeatClassState, Train

logger = logging.getLogger(__name__)


class DataPersistence:
    """
    Saves and loads the full reservation state to a single SQLite file.

    Each save and each load runs in one transaction, so a failure never
    leaves a half-written file or half-applied state behind.
    """

    def __init__(self, data_file: Path):
        self.data_file = Path(data_file)
        self._engine: Optional[Engine] = None

    @property
    def backup_file(self) -> Path:
        return self.data_file.with_name(self.data_file.name + ".backup")

    @property
    def database_url(self) -> str:
        return sqlite_url(self.data_file)

    def _get_engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_db_engine(self.database_url)
        return self._engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def save_all(self, trains: Iterable[Train], bookings: Iterable[Booking]) -> None:
        """Replace the file contents with the given trains and bookings"""
        trains = list(trains)
        bookings = list(bookings)

        waitlist_positions: Dict[str, int] = {}
        for train in trains:
            for class_type in train.classes():
                for index, queued in enumerate(train.seat_class(class_type).waitlist()):
                    waitlist_positions[queued.pnr] = index

        try:
            engine = self._get_engine()
            Base.metadata.create_all(bind=engine)
            SessionLocal = create_session_factory(engine)

            with SessionLocal() as db:
                try:
                    db.query(SeatClassRecord).delete()
                    db.query(TrainRecord).delete()
                    db.query(PassengerRecord).delete()

                    for position, train in enumerate(trains):
                        record = TrainRecord(
                            train_number=train.train_number,
                            train_name=train.train_name,
                            position=position
                        )
                        for class_position, class_type in enumerate(train.classes()):
                            state = train.seat_class(class_type)
                            record.seat_classes.append(SeatClassRecord(
                                class_type=class_type,
                                total_seats=state.total,
                                available_seats=state.available,
                                position=class_position
                            ))
                        db.add(record)

                    for position, booking in enumerate(bookings):
                        db.add(PassengerRecord(
                            pnr=booking.pnr,
                            name=booking.name,
                            age=booking.age,
                            gender=booking.gender,
                            train_number=booking.train_number,
                            class_type=booking.class_type,
                            seat_number=booking.seat_number,
                            status=booking.status.value,
                            booked_at=booking.booked_at,
                            position=position,
                            waitlist_position=waitlist_positions.get(booking.pnr)
                        ))

                    db.commit()
                except SQLAlchemyError:
                    db.rollback()
                    raise
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to save data to %s: %s", self.data_file, e)
            raise PersistenceError(f"Failed to save data: {e}") from e

        logger.info(
            "Saved %d trains and %d bookings to %s", len(trains), len(bookings), self.data_file
        )

    def load_all(self) -> Tuple[List[Train], List[Booking]]:
        """Rebuild trains (with waitlists) and bookings from the data file"""
        if not self.data_files_exist():
            raise PersistenceError(f"Data file {self.data_file} not found.")

        try:
            SessionLocal = create_session_factory(self._get_engine())
            with SessionLocal() as db:
                train_rows = db.query(TrainRecord).order_by(TrainRecord.position).all()
                trains = []
                for row in train_rows:
                    train = Train(row.train_number, row.train_name, seat_config={})
                    for class_row in row.seat_classes:
                        train.restore_class(
                            class_row.class_type,
                            SeatClassState(class_row.total_seats, class_row.available_seats)
                        )
                    trains.append(train)

                passenger_rows = db.query(PassengerRecord).order_by(PassengerRecord.position).all()
                bookings = []
                queued = []
                for row in passenger_rows:
                    booking = Booking(
                        pnr=row.pnr,
                        name=row.name,
                        age=row.age,
                        gender=row.gender,
                        train_number=row.train_number,
                        class_type=row.class_type,
                        seat_number=row.seat_number,
                        status=BookingStatus(row.status),
                        booked_at=row.booked_at
                    )
                    bookings.append(booking)
                    if booking.status == BookingStatus.WAITLISTED and row.waitlist_position is not None:
                        queued.append((row.waitlist_position, booking))
        except (SQLAlchemyError, ValidationError, ValueError) as e:
            logger.error("Failed to load data from %s: %s", self.data_file, e)
            raise PersistenceError(f"Failed to load data: {e}") from e

        by_number = {train.train_number: train for train in trains}
        for _, booking in sorted(queued, key=lambda item: item[0]):
            train = by_number.get(booking.train_number)
            if train is None or booking.class_type not in train.classes():
                raise PersistenceError(
                    f"Failed to load data: waitlisted booking {booking.pnr} references "
                    f"unknown {booking.train_number}/{booking.class_type}"
                )
            train.add_to_waitlist(booking, booking.class_type)

        logger.info(
            "Loaded %d trains and %d bookings from %s", len(trains), len(bookings), self.data_file
        )
        return trains, bookings

    def data_files_exist(self) -> bool:
        return self.data_file.exists()

    def create_backup(self) -> Optional[Path]:
        """Copy the data file next to itself; returns the backup path, or None without data"""
        if not self.data_files_exist():
            return None
        try:
            shutil.copy2(self.data_file, self.backup_file)
        except OSError as e:
            raise PersistenceError(f"Failed to create backup: {e}") from e
        logger.info("Backup written to %s", self.backup_file)
        return self.backup_file

    def file_info(self) -> DataFileInfo:
        if self.data_files_exist():
            return DataFileInfo(
                path=str(self.data_file),
                exists=True,
                size_bytes=self.data_file.stat().st_size
            )
        return DataFileInfo(path=str(self.data_file), exists=False)

    def clear_data_files(self) -> bool:
        self.dispose()
        if self.data_files_exist():
            self.data_file.unlink()
            logger.info("Deleted data file %s", self.data_file)
            return True
        return False
