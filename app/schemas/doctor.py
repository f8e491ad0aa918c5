from pydantic import Field
from typing import List
from uuid import UUID
from datetime import datetime

from app.schemas.base import CamelModel

class DoctorBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    specialization: str = Field(min_length=1, max_length=255)

class DoctorCreate(DoctorBase):
    pass

class DoctorResponse(DoctorBase):
    id: UUID
    created_at: datetime

class DoctorEnvelope(CamelModel):
    doctor: DoctorResponse

class DoctorListEnvelope(CamelModel):
    doctors: List[DoctorResponse]
