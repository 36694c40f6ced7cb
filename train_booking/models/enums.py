"""
Enums for the train booking application.

This module contains the enumeration types shared by the domain model,
the configuration layer and the console front end.
"""

from enum import Enum


class SeatKind(str, Enum):
    """Seat position within a row."""
    WINDOW = "window"
    AISLE = "aisle"

    @property
    def tag(self) -> str:
        """Single-letter suffix used in seat ids."""
        return "W" if self is SeatKind.WINDOW else "A"

    @property
    def opposite(self) -> "SeatKind":
        return SeatKind.AISLE if self is SeatKind.WINDOW else SeatKind.WINDOW


class TrainState(str, Enum):
    """Booking session state of a train."""
    IDLE = "idle"
    BOOKING_OPEN = "booking_open"


class RecordPolicy(str, Enum):
    """How catalog loading treats records that fail to parse."""
    SKIP = "skip"        # Drop the record, log a warning, keep loading
    STRICT = "strict"    # Re-raise the first parse error
