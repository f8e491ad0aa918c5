from sqlmodel import SQLModel
from .doctor import Doctor
from .slot import Slot
from .booking import Booking, BookingStatus

__all__ = [
    "SQLModel",
    "Doctor",
    "Slot",
    "Booking",
    "BookingStatus",
]
