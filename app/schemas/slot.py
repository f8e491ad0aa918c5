from pydantic import Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from app.db.models import BookingStatus
from app.schemas.base import CamelModel

class SlotCreate(CamelModel):
    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    capacity: int = Field(gt=0)

class SlotCapacityUpdate(CamelModel):
    capacity: int = Field(ge=0)

class SlotResponse(CamelModel):
    id: UUID
    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    capacity: int
    is_active: Optional[bool] = True
    created_at: datetime

class SlotBooking(CamelModel):
    id: UUID
    user_name: str
    status: BookingStatus
    created_at: datetime

class SlotWithAvailability(SlotResponse):
    doctor_name: str
    doctor_specialization: str
    confirmed_count: int
    # capacity - confirmed_count, negative when capacity was lowered under it
    available_seats: int
    bookings: List[SlotBooking] = []

# Success bodies are wrapped in a key naming the resource
class CreatedSlotEnvelope(CamelModel):
    slot: SlotResponse

class SlotEnvelope(CamelModel):
    slot: SlotWithAvailability

class SlotListEnvelope(CamelModel):
    slots: List[SlotWithAvailability]
