"""
Seat models for the train booking application.

This module contains the seat record owned by a train's inventory and the
statistics model summarising an inventory.
"""

from typing import Dict
from pydantic import BaseModel, Field, ConfigDict

from .enums import SeatKind


class SeatModel(BaseModel):
    """
    Individual seat on a train.

    Only ``available`` may change after creation; the id, kind and row are
    frozen fields and assigning to them raises a ``ValidationError``.
    """
    model_config = ConfigDict(validate_assignment=True)

    seat_id: str = Field(..., frozen=True, description="Seat label (e.g., '0W', '3A')")
    kind: SeatKind = Field(..., frozen=True, description="Window or aisle")
    row: int = Field(..., ge=0, frozen=True, description="Row index (0-based)")
    available: bool = Field(default=True, description="Whether the seat can still be booked")

    @classmethod
    def for_row(cls, row: int, kind: SeatKind) -> "SeatModel":
        """Build the seat labelled ``<row><tag>``."""
        return cls(seat_id=f"{row}{kind.tag}", kind=kind, row=row)


class SeatInventoryStatsModel(BaseModel):
    """Point-in-time counts for one seat inventory."""

    total_seats: int = Field(..., ge=0, description="Number of seats generated")
    available_seats: int = Field(..., ge=0, description="Seats still bookable")
    booked_seats: int = Field(..., ge=0, description="Seats already booked")
    available_by_kind: Dict[SeatKind, int] = Field(
        default_factory=dict,
        description="Available seats per seat kind"
    )
