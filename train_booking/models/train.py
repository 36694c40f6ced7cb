"""
Read-only train summaries for listings.

The live ``Train`` object lives in ``train_booking.services.train``; these
models are snapshots handed to the presentation layer.
"""

from datetime import time
from pydantic import BaseModel, Field, ConfigDict

from .enums import TrainState


class TrainSummaryModel(BaseModel):
    """
    One row of the train listing.

    Mirrors the columns of the train selection table: departure time,
    destination and seats remaining.
    """
    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=1, description="1-based position in the catalog")
    departure_time: time = Field(..., description="Time of departure")
    destination: str = Field(..., description="Destination station")
    total_seats: int = Field(..., ge=0, description="Total seats on the train")
    seats_remaining: int = Field(..., ge=0, description="Seats still bookable")
    state: TrainState = Field(default=TrainState.IDLE, description="Booking session state")

    @property
    def is_full(self) -> bool:
        return self.seats_remaining == 0
