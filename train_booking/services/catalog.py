"""
Catalog of the trains loaded for one session.

The catalog keeps trains in input order, never gains or loses members
after load, and keeps a live seats-remaining total across all trains.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

from ..exceptions import ParseError, TrainNotFoundError
from ..models.enums import RecordPolicy
from ..models.train import TrainSummaryModel
from .train import Train

logger = logging.getLogger(__name__)

TotalListener = Callable[[int], None]


@dataclass
class SkippedRecord:
    """A record dropped while loading with ``RecordPolicy.SKIP``."""
    line_number: int
    record: str
    error: ParseError

    @property
    def reason(self) -> str:
        return str(self.error)


class TrainCatalog:
    """
    Ordered, fixed set of trains.

    Subscribes to every train it owns so the catalog-wide total can be
    pushed to listeners whenever any seat is booked.
    """

    def __init__(self, trains: Optional[Iterable[Train]] = None, skipped: Optional[List[SkippedRecord]] = None):
        self._trains: List[Train] = list(trains or [])
        self._skipped: List[SkippedRecord] = list(skipped or [])
        self._listeners: List[TotalListener] = []

        for train in self._trains:
            train.subscribe(self._on_train_changed)

    @classmethod
    def load(cls, records: Iterable[str], policy: RecordPolicy = RecordPolicy.SKIP) -> "TrainCatalog":
        """
        Build a catalog from already-read record lines.

        Blank lines are ignored. Records that fail to parse are dropped and
        logged under ``SKIP``; under ``STRICT`` the first failure propagates.

        Args:
            records: One ``DepartureTime,Destination,TotalSeats`` string per record
            policy: What to do with records that fail to parse

        Returns:
            TrainCatalog: Catalog of the records that parsed

        Raises:
            ParseError: Under ``STRICT``, for the first bad record
        """
        policy = RecordPolicy(policy)
        trains: List[Train] = []
        skipped: List[SkippedRecord] = []

        for line_number, record in enumerate(records, start=1):
            if not record.strip():
                continue

            try:
                trains.append(Train.from_line(record))
            except ParseError as e:
                if policy is RecordPolicy.STRICT:
                    logger.error(f"Record {line_number} rejected: {e}")
                    raise
                logger.warning(f"Skipping record {line_number} ({record!r}): {e}")
                skipped.append(SkippedRecord(line_number=line_number, record=record, error=e))

        logger.info(f"Loaded {len(trains)} trains ({len(skipped)} records skipped)")
        return cls(trains, skipped)

    def __len__(self) -> int:
        return len(self._trains)

    def __iter__(self) -> Iterator[Train]:
        return iter(self._trains)

    @property
    def is_empty(self) -> bool:
        return not self._trains

    @property
    def skipped(self) -> List[SkippedRecord]:
        return list(self._skipped)

    def list_trains(self) -> List[Train]:
        """Trains in input order."""
        return list(self._trains)

    def get(self, index: int) -> Train:
        """
        Return the train at a 0-based position.

        Raises:
            TrainNotFoundError: If the position is out of range
        """
        if not 0 <= index < len(self._trains):
            raise TrainNotFoundError(f"No train at position {index + 1}")
        return self._trains[index]

    def total_seats_remaining(self) -> int:
        return sum(train.seats_remaining() for train in self._trains)

    def summaries(self) -> List[TrainSummaryModel]:
        """Listing rows for every train, numbered from 1."""
        return [train.summary(position) for position, train in enumerate(self._trains, start=1)]

    def trains_with_free_seats(self, exclude: Optional[Train] = None) -> List[Train]:
        """Trains that can still take a booking, other than ``exclude``."""
        return [
            train for train in self._trains
            if train is not exclude and not train.is_full()
        ]

    def subscribe(self, listener: TotalListener) -> None:
        """Register a callback receiving the new catalog total after each booking."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TotalListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _on_train_changed(self, train: Train, seats_remaining: int) -> None:
        total = self.total_seats_remaining()
        logger.debug(f"{train.label} has {seats_remaining} seats left, {total} across all trains")
        for listener in list(self._listeners):
            try:
                listener(total)
            except Exception:
                logger.exception(f"Catalog listener {listener!r} failed")
