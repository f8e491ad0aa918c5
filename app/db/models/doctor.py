from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4
from sqlalchemy import Column

from app.core.utils import utcnow
from .types import UTCDateTime

if TYPE_CHECKING:
    from .slot import Slot

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    specialization: str
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False, index=True),
    )

    # Slots and their bookings go with the doctor (ON DELETE CASCADE)
    slots: List["Slot"] = Relationship(
        back_populates="doctor",
        sa_relationship_kwargs={"passive_deletes": True},
    )
