import random

import pytest

from reservation.bookings.schemas import BookingStatus
from reservation.exceptions import PersistenceError
from reservation.persistence.service import DataPersistence
from reservation.system import ReservationSystem


@pytest.fixture
def populated(system):
    engine = system.engine
    system.trains.configure_seats("56789", "AC", 1)
    confirmed = engine.book("Asha Rao", 34, "F", "56789", "AC").booking
    first = engine.book("Ravi Kumar", 41, "M", "56789", "AC").booking
    second = engine.book("Meena Iyer", 29, "F", "56789", "AC").booking
    cancelled = engine.book("Vikram Singh", 52, "M", "12345", "Sleeper").booking
    engine.cancel(cancelled.pnr)
    return system, confirmed, first, second


def test_round_trip_restores_state(populated, config):
    system, confirmed, first, second = populated
    system.save()

    restored = ReservationSystem(config=config, rng=random.Random(1))
    assert restored.load() is True

    assert [b.pnr for b in restored.bookings.all()] == [b.pnr for b in system.bookings.all()]
    for saved in system.bookings.all():
        loaded = restored.bookings.get(saved.pnr)
        assert loaded.model_dump() == saved.model_dump()

    for saved in system.trains.all():
        loaded = restored.trains.get(saved.train_number)
        assert loaded.train_name == saved.train_name
        for class_type in saved.classes():
            assert loaded.availability(class_type) == saved.availability(class_type)

    waitlist = restored.trains.get("56789").seat_class("AC").waitlist()
    assert [b.pnr for b in waitlist] == [first.pnr, second.pnr]
    assert waitlist[0] is restored.bookings.get(first.pnr)


def test_promotion_after_reload(populated, config):
    system, confirmed, first, second = populated
    system.save()

    restored = ReservationSystem(config=config)
    restored.load()
    result = restored.engine.cancel(confirmed.pnr)

    assert result.promoted_booking.pnr == first.pnr
    assert restored.bookings.get(first.pnr).status == BookingStatus.CONFIRMED
    assert restored.bookings.get(first.pnr).seat_number == "A00"


def test_save_replaces_previous_contents(populated, config):
    system, *_ = populated
    system.save()
    system.engine.book("Late Arrival", 22, "M", "34567", "Sleeper")
    system.save()

    trains, bookings = DataPersistence(config.DATA_FILE).load_all()
    assert len(bookings) == len(system.bookings)
    assert len(trains) == len(system.trains)


def test_load_missing_file(tmp_path):
    with pytest.raises(PersistenceError):
        DataPersistence(tmp_path / "absent.db").load_all()


def test_load_corrupt_file_keeps_defaults(config):
    config.DATA_FILE.write_bytes(b"this is not a database")
    system = ReservationSystem(config=config)

    with pytest.raises(PersistenceError):
        system.persistence.load_all()
    assert system.load() is False
    assert len(system.trains) == 5


def test_failed_save_leaves_registries_untouched(populated, tmp_path):
    system, *_ = populated
    before = [b.model_dump() for b in system.bookings.all()]
    persistence = DataPersistence(tmp_path / "missing-dir" / "railway.db")

    with pytest.raises(PersistenceError):
        persistence.save_all(system.trains.all(), system.bookings.all())
    assert [b.model_dump() for b in system.bookings.all()] == before


def test_backup_info_and_clear(populated):
    system, *_ = populated
    persistence = system.persistence

    assert persistence.create_backup() is None
    assert not persistence.file_info().exists
    assert persistence.file_info().describe() == "Data file: Not found"

    system.save()
    backup = persistence.create_backup()
    assert backup is not None and backup.exists()
    info = persistence.file_info()
    assert info.exists and info.size_bytes > 0

    assert persistence.clear_data_files() is True
    assert not persistence.data_files_exist()
    assert persistence.clear_data_files() is False


def test_engine_targets_the_data_file(tmp_path):
    persistence = DataPersistence(tmp_path / "railway.db")

    assert persistence.database_url == f"sqlite:///{tmp_path / 'railway.db'}"
    assert persistence._get_engine().url.database == str(tmp_path / "railway.db")
