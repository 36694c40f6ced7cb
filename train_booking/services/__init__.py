"""
Domain services for the train booking application.

Seat inventories, trains with their booking-session gate, the train
catalog and the departure file loader.
"""

from .seat_inventory import SeatInventory
from .train import Train, parse_departure_time, parse_total_seats
from .catalog import TrainCatalog, SkippedRecord
from .loader import read_records, load_catalog

__all__ = [
    "SeatInventory",
    "Train",
    "parse_departure_time",
    "parse_total_seats",
    "TrainCatalog",
    "SkippedRecord",
    "read_records",
    "load_catalog",
]
