import random

import pytest
from fastapi.testclient import TestClient

from reservation.bookings.booking_service import BookingEngine
from reservation.bookings.registry import BookingRegistry
from reservation.config import Settings
from reservation.main import create_app
from reservation.system import ReservationSystem
from reservation.trains.service import TrainRegistry

ADMIN_PASSWORD = "admin123"


@pytest.fixture
def trains():
    registry = TrainRegistry(
        valid_classes=["AC", "Sleeper"],
        default_seat_config={"AC": 20, "Sleeper": 50}
    )
    registry.add("T1", "Test Express", {"AC": 1, "Sleeper": 2})
    return registry


@pytest.fixture
def bookings():
    return BookingRegistry(rng=random.Random(42), pnr_prefix="PNR")


@pytest.fixture
def engine(trains, bookings):
    return BookingEngine(trains, bookings)


@pytest.fixture
def config(tmp_path):
    return Settings(
        _env_file=None,
        DATA_FILE=tmp_path / "railway.db",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SEAT_CLASSES=["AC", "Sleeper"],
        DEFAULT_AC_SEATS=20,
        DEFAULT_SLEEPER_SEATS=50,
        PNR_PREFIX="PNR"
    )


@pytest.fixture
def system(config):
    return ReservationSystem(config=config, rng=random.Random(7))


@pytest.fixture
def client(system):
    return TestClient(create_app(system))


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}
