"""
Seat inventory for a single train.

This module derives a train's seats from its total seat count and tracks
which of them have been booked:
- Row-major generation, one window and one aisle seat per row
- Live seats-remaining count, never cached between bookings
- First-available lookups used for the fallback seat offer
- Listener registration so owners observe each booking
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from ..exceptions import InvalidCapacityError, SeatAlreadyBookedError, SeatNotFoundError
from ..models.enums import SeatKind
from ..models.seat import SeatModel, SeatInventoryStatsModel

logger = logging.getLogger(__name__)

SeatListener = Callable[[SeatModel], None]


class SeatInventory:
    """
    Ordered collection of the seats belonging to one train.

    Seats are kept in generation order: for each row a window seat then an
    aisle seat, with a trailing window-only row when the count is odd.
    """

    def __init__(self, seats: List[SeatModel]):
        """
        Initialize the inventory.

        Args:
            seats: Seats in display order; ids must be unique
        """
        self._seats: List[SeatModel] = list(seats)
        self._by_id: Dict[str, SeatModel] = {seat.seat_id: seat for seat in self._seats}
        self._listeners: List[SeatListener] = []

        if len(self._by_id) != len(self._seats):
            raise ValueError("Seat ids must be unique within an inventory")

    @classmethod
    def for_capacity(cls, total_seats: int) -> "SeatInventory":
        """Create an inventory with ``total_seats`` freshly generated seats."""
        return cls(cls.generate(total_seats))

    @staticmethod
    def generate(total_seats: int) -> List[SeatModel]:
        """
        Generate the seats for a train with ``total_seats`` seats.

        Args:
            total_seats: Total number of seats, window and aisle combined

        Returns:
            List[SeatModel]: ``0W, 0A, 1W, 1A, ...`` plus one extra window
            seat on the next row when ``total_seats`` is odd

        Raises:
            InvalidCapacityError: If ``total_seats`` is negative
        """
        if total_seats < 0:
            raise InvalidCapacityError(f"Seat count cannot be negative: {total_seats}")

        seats = []
        full_rows = total_seats // 2

        for row in range(full_rows):
            seats.append(SeatModel.for_row(row, SeatKind.WINDOW))
            seats.append(SeatModel.for_row(row, SeatKind.AISLE))

        # Odd seat count gets a window seat of its own
        if total_seats % 2:
            seats.append(SeatModel.for_row(full_rows, SeatKind.WINDOW))

        return seats

    def __len__(self) -> int:
        return len(self._seats)

    def __iter__(self) -> Iterator[SeatModel]:
        return iter(self.seats)

    @property
    def seats(self) -> List[SeatModel]:
        """
        Snapshots of the seats in display order.

        Changing a returned seat does not touch the inventory; seats are
        only ever booked through ``book``.
        """
        return [seat.model_copy() for seat in self._seats]

    @property
    def total_seats(self) -> int:
        return len(self._seats)

    @property
    def seats_remaining(self) -> int:
        return self.count_available()

    def count_available(self) -> int:
        """Count seats that are still available."""
        return sum(1 for seat in self._seats if seat.available)

    def get_seat(self, seat_id: str) -> SeatModel:
        """
        Look up a snapshot of a seat by id.

        Raises:
            SeatNotFoundError: If no seat has that id
        """
        return self._find(seat_id).model_copy()

    def book(self, seat_id: str) -> SeatModel:
        """
        Mark a seat as booked.

        A failed attempt leaves every seat untouched. Listeners run after
        the booking is recorded; a listener that raises is logged and does
        not undo the booking or stop the remaining listeners.

        Args:
            seat_id: Id of the seat to book (case-insensitive)

        Returns:
            SeatModel: Snapshot of the seat that was booked

        Raises:
            SeatNotFoundError: If no seat has that id
            SeatAlreadyBookedError: If the seat is already booked
        """
        seat = self._find(seat_id)

        if not seat.available:
            logger.debug(f"Seat {seat.seat_id} already booked")
            raise SeatAlreadyBookedError(
                "This seat is already booked. Please select a different seat.",
                seat.seat_id
            )

        seat.available = False
        logger.debug(f"Booked seat {seat.seat_id}, {self.seats_remaining} remaining")

        booked = seat.model_copy()
        for listener in list(self._listeners):
            try:
                listener(booked.model_copy())
            except Exception:
                logger.exception(f"Seat listener {listener!r} failed for seat {booked.seat_id}")

        return booked

    def first_available_of_kind(self, kind: SeatKind) -> Optional[SeatModel]:
        """Return the first available seat of ``kind``, or None."""
        for seat in self._seats:
            if seat.available and seat.kind == kind:
                return seat.model_copy()
        return None

    def first_available(self) -> Optional[SeatModel]:
        """Return the first available seat of any kind, or None."""
        for seat in self._seats:
            if seat.available:
                return seat.model_copy()
        return None

    def available_seats(self, kind: Optional[SeatKind] = None) -> List[SeatModel]:
        """Available seats in display order, optionally filtered by kind."""
        return [
            seat for seat in self.seats
            if seat.available and (kind is None or seat.kind == kind)
        ]

    def rows(self) -> List[List[SeatModel]]:
        """Seat snapshots grouped by row, in row order."""
        grouped: Dict[int, List[SeatModel]] = {}
        for seat in self.seats:
            grouped.setdefault(seat.row, []).append(seat)
        return [grouped[row] for row in sorted(grouped)]

    def stats(self) -> SeatInventoryStatsModel:
        """Snapshot of the inventory counts."""
        available = self.count_available()
        return SeatInventoryStatsModel(
            total_seats=self.total_seats,
            available_seats=available,
            booked_seats=self.total_seats - available,
            available_by_kind={
                kind: len(self.available_seats(kind)) for kind in SeatKind
            }
        )

    def add_listener(self, listener: SeatListener) -> None:
        """Register a callback invoked with each newly booked seat."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SeatListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _find(self, seat_id: str) -> SeatModel:
        seat = self._by_id.get(seat_id.strip().upper())
        if seat is None:
            raise SeatNotFoundError(f"No seat {seat_id!r} on this train", seat_id)
        return seat
