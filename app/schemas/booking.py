from pydantic import Field
from uuid import UUID
from datetime import datetime

from app.db.models import BookingStatus
from app.schemas.base import CamelModel

class BookingCreate(CamelModel):
    slot_id: UUID
    user_name: str = Field(min_length=1, max_length=255)

class BookingResponse(CamelModel):
    id: UUID
    slot_id: UUID
    user_name: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

class BookingEnvelope(CamelModel):
    booking: BookingResponse
