"""
Exception hierarchy for the train booking domain.

Parse errors are recovered per record, seat and session errors per user
interaction. ``InvalidCapacityError`` signals a broken caller contract and
is meant to propagate.
"""


class TrainBookingError(Exception):
    """Base class for all train booking errors."""
    pass


# Parse errors

class ParseError(TrainBookingError):
    """A departure record could not be turned into a train."""

    def __init__(self, message: str, record: str = ""):
        super().__init__(message)
        self.record = record


class TimeFormatError(ParseError):
    """Departure time does not match the HH.mm pattern."""
    pass


class CapacityFormatError(ParseError):
    """Total seat count is not a base-10 non-negative integer."""
    pass


class RecordFormatError(ParseError):
    """A record line does not have the three expected fields."""
    pass


# Seat errors

class SeatError(TrainBookingError):
    """A seat could not be booked."""

    def __init__(self, message: str, seat_id: str):
        super().__init__(message)
        self.seat_id = seat_id


class SeatNotFoundError(SeatError):
    """No seat with the requested id exists on the train."""
    pass


class SeatAlreadyBookedError(SeatError):
    """The requested seat has already been booked."""
    pass


# Session errors

class SessionError(TrainBookingError):
    """A booking session could not be opened on a train."""
    pass


class BookingBusyError(SessionError):
    """A booking session is already open on the train."""
    pass


class TrainFullError(SessionError):
    """The train has no seats remaining."""
    pass


class TrainNotFoundError(TrainBookingError):
    """No train exists at the requested catalog position."""
    pass


class InvalidCapacityError(TrainBookingError, ValueError):
    """A negative seat count was passed to inventory generation."""
    pass
