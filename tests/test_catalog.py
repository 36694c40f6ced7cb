"""
Train catalog and loader tests.

Covers record policies, live seat totals and the graceful handling of an
unreadable departure file.
"""

import pytest
from datetime import time

from train_booking.exceptions import (
    CapacityFormatError,
    TimeFormatError,
    TrainFullError,
    TrainNotFoundError,
)
from train_booking.models.enums import RecordPolicy
from train_booking.services.catalog import TrainCatalog
from train_booking.services.loader import load_catalog, read_records


RECORDS = [
    "09.30,London,12",
    "14.05,Leeds,7",
    "16.30,Bristol,0",
]


class TestCatalogLoad:
    """Test building catalogs from record lines."""

    def test_load_keeps_input_order(self):
        catalog = TrainCatalog.load(RECORDS)
        assert [train.destination for train in catalog.list_trains()] == ["London", "Leeds", "Bristol"]
        assert len(catalog) == 3

    def test_malformed_record_skipped(self):
        """A bad line is dropped and the other trains load normally."""
        catalog = TrainCatalog.load(["09.30,London,12", "bad,Paris,abc", "14.05,Leeds,7"])

        assert [train.destination for train in catalog.list_trains()] == ["London", "Leeds"]
        assert len(catalog.skipped) == 1
        assert catalog.skipped[0].line_number == 2
        assert catalog.skipped[0].record == "bad,Paris,abc"
        assert isinstance(catalog.skipped[0].error, TimeFormatError)

    def test_skipped_record_logged(self, caplog):
        with caplog.at_level("WARNING"):
            TrainCatalog.load(["09.30,Paris,lots"])
        assert "Skipping record 1" in caplog.text

    def test_strict_policy_raises(self):
        with pytest.raises(CapacityFormatError):
            TrainCatalog.load(["09.30,London,12", "10.00,Paris,many"], RecordPolicy.STRICT)

    def test_policy_accepts_string(self):
        with pytest.raises(TimeFormatError):
            TrainCatalog.load(["bad,Paris,abc"], "strict")

    def test_blank_lines_ignored(self):
        catalog = TrainCatalog.load(["", "09.30,London,12", "   ", ""], RecordPolicy.STRICT)
        assert len(catalog) == 1
        assert catalog.skipped == []

    def test_empty_catalog(self):
        catalog = TrainCatalog.load([])
        assert catalog.is_empty
        assert catalog.list_trains() == []
        assert catalog.total_seats_remaining() == 0

    def test_list_trains_returns_copy(self):
        catalog = TrainCatalog.load(RECORDS)
        catalog.list_trains().clear()
        assert len(catalog) == 3


class TestCatalogQueries:
    """Test catalog-level queries."""

    @pytest.fixture
    def catalog(self):
        return TrainCatalog.load(RECORDS)

    def test_total_seats_remaining_is_live(self, catalog):
        """The total follows bookings made after load."""
        assert catalog.total_seats_remaining() == 19

        catalog.get(0).book_seat("0W")
        catalog.get(1).book_seat("3W")

        assert catalog.total_seats_remaining() == 17

    def test_zero_seat_catalog(self):
        catalog = TrainCatalog.load(["09.30,London,0"])
        assert catalog.total_seats_remaining() == 0

        train = catalog.get(0)
        with pytest.raises(TrainFullError):
            train.begin_booking_session()
        assert train.booking_in_progress is False

    def test_get_out_of_range(self, catalog):
        with pytest.raises(TrainNotFoundError):
            catalog.get(3)
        with pytest.raises(TrainNotFoundError):
            catalog.get(-1)

    def test_summaries(self, catalog):
        summaries = catalog.summaries()
        assert [summary.position for summary in summaries] == [1, 2, 3]
        assert summaries[2].is_full

    def test_trains_with_free_seats(self, catalog):
        london = catalog.get(0)
        alternatives = catalog.trains_with_free_seats(exclude=london)
        assert [train.destination for train in alternatives] == ["Leeds"]

    def test_subscribe_total(self, catalog):
        """Listeners receive the new catalog total after each booking."""
        totals = []
        catalog.subscribe(totals.append)

        catalog.get(0).book_seat("0W")
        catalog.get(1).inventory.book("0A")

        assert totals == [18, 17]

    def test_failing_total_listener_keeps_booking(self, catalog):
        """A subscriber that raises does not turn a booking into an error."""
        totals = []

        def broken(total):
            raise RuntimeError("display went away")

        catalog.subscribe(broken)
        catalog.subscribe(totals.append)

        catalog.get(0).book_seat("0W")

        assert catalog.get(0).seats_remaining() == 11
        assert catalog.total_seats_remaining() == 18
        assert totals == [18]

    def test_unsubscribe_total(self, catalog):
        totals = []
        catalog.subscribe(totals.append)
        catalog.unsubscribe(totals.append)

        catalog.get(0).book_seat("0W")

        assert totals == []


class TestLoader:
    """Test reading departure files."""

    def test_read_records(self, tmp_path):
        path = tmp_path / "Train Data.txt"
        path.write_text("09.30,London,12\n14.05,Leeds,7\n", encoding="utf-8")

        assert read_records(path) == ["09.30,London,12", "14.05,Leeds,7"]

    def test_read_missing_file(self, tmp_path):
        assert read_records(tmp_path / "missing.txt") is None

    def test_load_catalog(self, tmp_path):
        path = tmp_path / "trains.txt"
        path.write_text("09.30,London,12\nbad,Paris,abc\n14.05,Leeds,7\n", encoding="utf-8")

        catalog = load_catalog(path)

        assert len(catalog) == 2
        assert catalog.total_seats_remaining() == 19

    def test_unreadable_file_gives_empty_catalog(self, tmp_path):
        """A missing file starts the application with no trains."""
        catalog = load_catalog(tmp_path / "missing.txt")
        assert catalog.is_empty

    def test_directory_gives_empty_catalog(self, tmp_path):
        catalog = load_catalog(tmp_path)
        assert catalog.is_empty

    def test_strict_load_catalog(self, tmp_path):
        path = tmp_path / "trains.txt"
        path.write_text("09.30,London,12\n25.00,Paris,3\n", encoding="utf-8")

        with pytest.raises(TimeFormatError):
            load_catalog(path, RecordPolicy.STRICT)

    def test_byte_order_mark_dropped(self, tmp_path):
        """A file saved with a BOM still parses its first record."""
        path = tmp_path / "trains.txt"
        path.write_text("09.30,London,12\n14.05,Leeds,7\n", encoding="utf-8-sig")

        catalog = load_catalog(path, RecordPolicy.STRICT)

        assert len(catalog) == 2
        assert catalog.get(0).destination == "London"
        assert catalog.get(0).departure_time == time(9, 30)

    def test_only_newlines_split_records(self, tmp_path):
        """Form feeds and other Unicode breaks stay inside the record."""
        path = tmp_path / "trains.txt"
        path.write_text("09.30,Lon\x0cdon,12\n14.05,Le\u2028eds,7\n", encoding="utf-8", newline="")

        catalog = load_catalog(path)

        assert [train.destination for train in catalog.list_trains()] == ["Lon\x0cdon", "Le\u2028eds"]
        assert catalog.skipped == []

    def test_windows_line_endings(self, tmp_path):
        path = tmp_path / "trains.txt"
        path.write_bytes(b"09.30,London,12\r\n14.05,Leeds,7\r\n")

        assert read_records(path) == ["09.30,London,12", "14.05,Leeds,7"]
