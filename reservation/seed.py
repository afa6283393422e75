from reservation.trains.seating import AC_CLASS, SLEEPER_CLASS
from reservation.trains.service import TrainRegistry

# (train number, name, seat overrides); None keeps the registry defaults
DEFAULT_TRAINS = [
    ("12345", "Rajdhani Express", {AC_CLASS: 30, SLEEPER_CLASS: 60}),
    ("23456", "Shatabdi Express", {AC_CLASS: 40, SLEEPER_CLASS: 40}),
    ("34567", "Duronto Express", None),
    ("45678", "Garib Rath", None),
    ("56789", "Jan Shatabdi", None),
]


def seed_default_trains(registry: TrainRegistry) -> int:
    """Add the default trains that are not present yet; returns how many were added"""
    added = 0
    for train_number, train_name, seat_config in DEFAULT_TRAINS:
        if registry.add(train_number, train_name, seat_config):
            added += 1
    return added
