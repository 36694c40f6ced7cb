"""
Shared fixtures for the train booking tests.
"""

import pytest

from train_booking.services.train import Train
from train_booking.utils.config import reset_config

BOOKING_ENV_VARS = [
    "TRAIN_DATA_FILE",
    "RECORD_POLICY",
    "BOOKING_LOG_LEVEL",
    "BOOKING_DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove booking settings from the environment and drop the cached config."""
    for name in BOOKING_ENV_VARS:
        # setenv first so monkeypatch restores the original state on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_config()
    yield monkeypatch
    reset_config()


@pytest.fixture
def london_train():
    """The 12-seat London departure."""
    return Train.from_line("09.30,London,12")


@pytest.fixture
def leeds_train():
    """The 7-seat Leeds departure."""
    return Train.from_line("14.05,Leeds,7")
