"""
Train booking Pydantic models package.

This package contains the enums and Pydantic v2 models used by the domain
services and the console front end.
"""

# Enums
from .enums import (
    SeatKind,
    TrainState,
    RecordPolicy,
)

# Seat models
from .seat import (
    SeatModel,
    SeatInventoryStatsModel,
)

# Listing models
from .train import (
    TrainSummaryModel,
)

__all__ = [
    # Enums
    "SeatKind",
    "TrainState",
    "RecordPolicy",

    # Seat models
    "SeatModel",
    "SeatInventoryStatsModel",

    # Listing models
    "TrainSummaryModel",
]
