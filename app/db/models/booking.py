import enum
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4
from sqlalchemy import Column, Enum, Index

from app.core.utils import utcnow
from .types import UTCDateTime

if TYPE_CHECKING:
    from .slot import Slot

class BookingStatus(str, enum.Enum):
    """Booking lifecycle states.

    The allocator only ever writes CONFIRMED (a rejected attempt leaves no
    row). PENDING and FAILED are kept so the column matches the stored
    CHECK constraint and can carry a future hold/expiry flow.
    """
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"

class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_slot_status", "slot_id", "status"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slot_id: UUID = Field(foreign_key="slots.id", ondelete="CASCADE")
    user_name: str
    status: BookingStatus = Field(
        sa_column=Column(
            Enum(BookingStatus, name="booking_status", native_enum=False, length=16, create_constraint=True),
            nullable=False,
        )
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))

    slot: "Slot" = Relationship(back_populates="bookings")
