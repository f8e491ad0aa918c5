from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4
from sqlalchemy import CheckConstraint, Column, Index, true

from app.core.utils import utcnow
from .types import UTCDateTime

if TYPE_CHECKING:
    from .doctor import Doctor
    from .booking import Booking

class Slot(SQLModel, table=True):
    __tablename__ = "slots"
    __table_args__ = (
        # Creation requires capacity > 0; updates may lower it to 0
        CheckConstraint("capacity >= 0", name="ck_slots_capacity_non_negative"),
        Index("idx_slots_active_start_time", "is_active", "start_time"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", ondelete="CASCADE", index=True)
    start_time: datetime = Field(sa_column=Column(UTCDateTime(), nullable=False))
    end_time: datetime = Field(sa_column=Column(UTCDateTime(), nullable=False))
    capacity: int
    # NULL is treated as active
    is_active: Optional[bool] = Field(default=True, sa_column_kwargs={"server_default": true()})
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))

    doctor: "Doctor" = Relationship(back_populates="slots")
    bookings: List["Booking"] = Relationship(
        back_populates="slot",
        sa_relationship_kwargs={"passive_deletes": True},
    )
