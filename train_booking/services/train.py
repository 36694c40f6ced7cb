"""
Train entity with its seat inventory and booking-session gate.

A train is built from one departure record and owns a ``SeatInventory``.
The ``booking_in_progress`` flag admits at most one seat-selection session
per train:

    IDLE --begin_booking_session()--> BOOKING_OPEN --end_booking_session()--> IDLE

Opening a session on a train that is already open raises
``BookingBusyError``; opening one on a train with no seats left raises
``TrainFullError``. Neither failure changes the train.
"""

import logging
import re
from contextlib import contextmanager
from datetime import time
from typing import Callable, Iterator, List

from ..exceptions import (
    BookingBusyError,
    CapacityFormatError,
    RecordFormatError,
    TimeFormatError,
    TrainFullError,
)
from ..models.enums import TrainState
from ..models.seat import SeatModel
from ..models.train import TrainSummaryModel
from .seat_inventory import SeatInventory

logger = logging.getLogger(__name__)

# 24-hour HH.mm, two digits each side of the dot
DEPARTURE_TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3])\.([0-5][0-9])$")
TOTAL_SEATS_PATTERN = re.compile(r"^[0-9]+$")

SeatsListener = Callable[["Train", int], None]
SessionListener = Callable[["Train", bool], None]


def parse_departure_time(text: str) -> time:
    """
    Parse a departure time in ``HH.mm`` form.

    Raises:
        TimeFormatError: If the trimmed text does not match the pattern
    """
    match = DEPARTURE_TIME_PATTERN.match(text.strip())
    if not match:
        raise TimeFormatError(f"Departure time must be HH.mm, got {text.strip()!r}", text)
    return time(int(match.group(1)), int(match.group(2)))


def parse_total_seats(text: str) -> int:
    """
    Parse a base-10 non-negative seat count.

    Raises:
        CapacityFormatError: If the trimmed text is not a plain integer
    """
    value = text.strip()
    if not TOTAL_SEATS_PATTERN.match(value):
        raise CapacityFormatError(f"Total seats must be a non-negative integer, got {value!r}", text)
    return int(value)


class Train:
    """
    One departure with its seats and booking-session gate.

    Departure time, destination and capacity never change after
    construction; only seat availability and the session flag do.
    """

    def __init__(self, departure_time: time, destination: str, total_seats: int):
        """
        Initialize a train and generate its seats.

        Args:
            departure_time: Time of departure
            destination: Destination station
            total_seats: Total seat count, seeds inventory generation

        Raises:
            InvalidCapacityError: If ``total_seats`` is negative
        """
        self._departure_time = departure_time
        self._destination = destination
        self._total_seats = total_seats
        self._inventory = SeatInventory.for_capacity(total_seats)
        self._booking_in_progress = False

        self._seat_listeners: List[SeatsListener] = []
        self._session_listeners: List[SessionListener] = []

        self._inventory.add_listener(self._on_seat_booked)

    @classmethod
    def from_record(
        cls,
        departure_time_text: str,
        destination_text: str,
        total_seats_text: str
    ) -> "Train":
        """
        Build a train from the three fields of one record.

        Raises:
            TimeFormatError: If the departure time is not ``HH.mm``
            CapacityFormatError: If the seat count is not a non-negative integer
        """
        return cls(
            departure_time=parse_departure_time(departure_time_text),
            destination=destination_text.strip(),
            total_seats=parse_total_seats(total_seats_text)
        )

    @classmethod
    def from_line(cls, line: str) -> "Train":
        """
        Build a train from one ``DepartureTime,Destination,TotalSeats`` line.

        Fields past the third are ignored.

        Raises:
            RecordFormatError: If the line has fewer than three fields
            TimeFormatError: If the departure time is not ``HH.mm``
            CapacityFormatError: If the seat count is not a non-negative integer
        """
        fields = line.split(",")
        if len(fields) < 3:
            raise RecordFormatError(f"Expected 3 comma-separated fields, got {len(fields)}", line)
        return cls.from_record(fields[0], fields[1], fields[2])

    def __repr__(self) -> str:
        return (
            f"Train(departure_time={self._departure_time:%H:%M}, "
            f"destination={self._destination!r}, total_seats={self._total_seats}, "
            f"seats_remaining={self.seats_remaining()})"
        )

    @property
    def departure_time(self) -> time:
        return self._departure_time

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def total_seats(self) -> int:
        return self._total_seats

    @property
    def inventory(self) -> SeatInventory:
        return self._inventory

    @property
    def seats(self) -> List[SeatModel]:
        return self._inventory.seats

    @property
    def booking_in_progress(self) -> bool:
        return self._booking_in_progress

    @property
    def state(self) -> TrainState:
        return TrainState.BOOKING_OPEN if self._booking_in_progress else TrainState.IDLE

    @property
    def label(self) -> str:
        """Short description, e.g. ``09:30 - London``."""
        return f"{self._departure_time:%H:%M} - {self._destination}"

    def seats_remaining(self) -> int:
        return self._inventory.seats_remaining

    def is_full(self) -> bool:
        return self.seats_remaining() == 0

    def begin_booking_session(self) -> None:
        """
        Open a seat-selection session on this train.

        Raises:
            BookingBusyError: If a session is already open
            TrainFullError: If no seats remain
        """
        if self._booking_in_progress:
            raise BookingBusyError("This train is already booking. Please wait.")

        if self.is_full():
            raise TrainFullError("This train is already booked. Please select a different train.")

        self._set_booking(True)
        logger.info(f"Booking session opened for {self.label}")

    def end_booking_session(self) -> None:
        """Close the seat-selection session. Safe to call when none is open."""
        if self._booking_in_progress:
            self._set_booking(False)
            logger.info(f"Booking session closed for {self.label}")

    @contextmanager
    def booking_session(self) -> Iterator["Train"]:
        """
        Hold the booking gate for the duration of a ``with`` block.

        Raises:
            BookingBusyError: If a session is already open
            TrainFullError: If no seats remain
        """
        self.begin_booking_session()
        try:
            yield self
        finally:
            self.end_booking_session()

    def book_seat(self, seat_id: str) -> SeatModel:
        """
        Book one seat on this train.

        Raises:
            SeatNotFoundError: If the train has no such seat
            SeatAlreadyBookedError: If the seat is already booked
        """
        return self._inventory.book(seat_id)

    def summary(self, position: int = 1) -> TrainSummaryModel:
        """Snapshot of this train for a listing at ``position`` (1-based)."""
        return TrainSummaryModel(
            position=position,
            departure_time=self._departure_time,
            destination=self._destination,
            total_seats=self._total_seats,
            seats_remaining=self.seats_remaining(),
            state=self.state
        )

    def subscribe(self, listener: SeatsListener) -> None:
        """Register a callback receiving ``(train, seats_remaining)`` after each booking."""
        if listener not in self._seat_listeners:
            self._seat_listeners.append(listener)

    def unsubscribe(self, listener: SeatsListener) -> None:
        if listener in self._seat_listeners:
            self._seat_listeners.remove(listener)

    def subscribe_session(self, listener: SessionListener) -> None:
        """Register a callback receiving ``(train, booking_in_progress)`` on session changes."""
        if listener not in self._session_listeners:
            self._session_listeners.append(listener)

    def unsubscribe_session(self, listener: SessionListener) -> None:
        if listener in self._session_listeners:
            self._session_listeners.remove(listener)

    def _set_booking(self, booking: bool) -> None:
        self._booking_in_progress = booking
        for listener in list(self._session_listeners):
            try:
                listener(self, booking)
            except Exception:
                logger.exception(f"Session listener {listener!r} failed for {self.label}")

    def _on_seat_booked(self, seat: SeatModel) -> None:
        remaining = self.seats_remaining()
        for listener in list(self._seat_listeners):
            try:
                listener(self, remaining)
            except Exception:
                logger.exception(f"Seat listener {listener!r} failed for {self.label}")
