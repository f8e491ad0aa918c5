from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.logger import logger
from app.db.models import Doctor
from app.schemas.doctor import DoctorCreate

class DoctorService:
    def __init__(self, session: AsyncSession, list_limit: int = 100):
        self.session = session
        self.list_limit = list_limit

    async def create_doctor(self, data: DoctorCreate) -> Doctor:
        # No uniqueness on name: two doctors may share one
        doctor = Doctor(name=data.name, specialization=data.specialization)
        self.session.add(doctor)
        await self.session.commit()
        await self.session.refresh(doctor)
        logger.info(f"Doctor {doctor.id} created")
        return doctor

    async def get_doctors(self) -> List[Doctor]:
        # Newest first, capped; there is no paging beyond the first page
        query = (
            select(Doctor)
            .order_by(Doctor.created_at.desc(), Doctor.id)
            .limit(self.list_limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()
