from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import and_, select
from typing import Dict, List, Optional
from uuid import UUID

from app.core.exceptions import DoctorNotFound
from app.core.logger import logger
from app.core.utils import to_utc
from app.db.models import Booking, BookingStatus, Doctor, Slot
from app.schemas.slot import SlotBooking, SlotCreate, SlotWithAvailability

class SlotService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_slot(self, data: SlotCreate) -> Slot:
        # Verify doctor exists
        doctor = await self.session.get(Doctor, data.doctor_id)
        if not doctor:
            raise DoctorNotFound(data.doctor_id)

        slot = Slot(
            doctor_id=data.doctor_id,
            start_time=to_utc(data.start_time),
            end_time=to_utc(data.end_time),
            capacity=data.capacity,
            is_active=True,
        )
        self.session.add(slot)
        await self.session.commit()
        await self.session.refresh(slot)
        logger.info(f"Slot {slot.id} created for doctor {doctor.id} with capacity {slot.capacity}")
        return slot

    async def list_active_slots(self) -> List[SlotWithAvailability]:
        return await self._load_with_availability()

    async def get_slot(self, slot_id: UUID, include_inactive: bool = False) -> Optional[SlotWithAvailability]:
        slots = await self._load_with_availability(slot_id=slot_id, include_inactive=include_inactive)
        return slots[0] if slots else None

    async def _load_with_availability(
        self,
        slot_id: Optional[UUID] = None,
        include_inactive: bool = False,
    ) -> List[SlotWithAvailability]:
        """
        Slots joined with their doctor and confirmed bookings.

        One statement, so the counts and the booking lists come from the same
        snapshot. No locks are taken: the figures are advisory and may be
        stale by the time a client acts on them.
        """
        stmt = (
            select(Slot, Doctor.name, Doctor.specialization, Booking)
            .join(Doctor, Doctor.id == Slot.doctor_id)
            .outerjoin(
                Booking,
                and_(
                    Booking.slot_id == Slot.id,
                    Booking.status == BookingStatus.CONFIRMED,
                ),
            )
        )
        if slot_id is not None:
            stmt = stmt.where(Slot.id == slot_id)
        if not include_inactive:
            stmt = stmt.where(Slot.is_active.is_not(False))
        stmt = stmt.order_by(Slot.start_time, Slot.id, Booking.created_at).execution_options(populate_existing=True)

        result = await self.session.execute(stmt)

        grouped: Dict[UUID, dict] = {}
        for slot, doctor_name, doctor_specialization, booking in result.all():
            entry = grouped.get(slot.id)
            if entry is None:
                entry = grouped[slot.id] = {
                    "slot": slot,
                    "doctor_name": doctor_name,
                    "doctor_specialization": doctor_specialization,
                    "bookings": [],
                }
            if booking is not None:
                entry["bookings"].append(SlotBooking.model_validate(booking))

        availability = []
        for entry in grouped.values():
            slot = entry["slot"]
            confirmed_count = len(entry["bookings"])
            availability.append(SlotWithAvailability(
                id=slot.id,
                doctor_id=slot.doctor_id,
                start_time=slot.start_time,
                end_time=slot.end_time,
                capacity=slot.capacity,
                is_active=slot.is_active is not False,
                created_at=slot.created_at,
                doctor_name=entry["doctor_name"],
                doctor_specialization=entry["doctor_specialization"],
                confirmed_count=confirmed_count,
                available_seats=slot.capacity - confirmed_count,
                bookings=entry["bookings"],
            ))
        return availability
