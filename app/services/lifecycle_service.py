from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, func, select
from uuid import UUID

from app.core.exceptions import (
    DoctorNotFound,
    InternalFailure,
    SlotHasConfirmedBookings,
    SlotNotFound,
)
from app.core.logger import logger
from app.db.models import Booking, BookingStatus, Doctor, Slot
from app.db.slot_lock import lock_slot
from app.schemas.slot import SlotWithAvailability
from app.services.slot_service import SlotService

HARD_DELETE_CASCADE = "cascade"
HARD_DELETE_BLOCK = "block"

class LifecycleService:
    """
    Structural changes to doctors and slots: capacity edits and deletes.

    Capacity edits and cascade deletes do not take the slot lock used by the
    booking allocator. A capacity cut or a delete can land between a booking
    being confirmed and the client reading it back; the allocator never lets
    an insert exceed the capacity it read under the lock.
    """

    def __init__(self, session: AsyncSession, hard_delete_policy: str = HARD_DELETE_CASCADE):
        if hard_delete_policy not in (HARD_DELETE_CASCADE, HARD_DELETE_BLOCK):
            raise ValueError(f"Unknown hard delete policy: {hard_delete_policy}")
        self.session = session
        self.hard_delete_policy = hard_delete_policy

    async def _count_confirmed(self, slot_id: UUID) -> int:
        stmt = select(func.count(Booking.id)).where(
            Booking.slot_id == slot_id,
            Booking.status == BookingStatus.CONFIRMED,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update_slot_capacity(self, slot_id: UUID, capacity: int) -> SlotWithAvailability:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")

        try:
            async with self.session.begin():
                slot = await self.session.get(Slot, slot_id)
                if not slot:
                    raise SlotNotFound(slot_id)
                previous = slot.capacity
                # Not clamped to the confirmed count; available seats may go negative
                slot.capacity = capacity
                self.session.add(slot)
        except SQLAlchemyError as exc:
            logger.error(f"Capacity update failed for slot {slot_id}: {exc}")
            raise InternalFailure() from exc

        logger.info(f"Slot {slot_id} capacity changed from {previous} to {capacity}")

        updated = await SlotService(self.session).get_slot(slot_id, include_inactive=True)
        if updated is None:
            # Deleted between the update and the read
            raise SlotNotFound(slot_id)
        if updated.available_seats < 0:
            logger.warning(
                f"Slot {slot_id} capacity {capacity} is below its "
                f"{updated.confirmed_count} confirmed bookings"
            )
        return updated

    async def soft_delete_slot(self, slot_id: UUID) -> None:
        try:
            async with self.session.begin():
                slot = await self.session.get(Slot, slot_id)
                if not slot:
                    raise SlotNotFound(slot_id)
                slot.is_active = False
                self.session.add(slot)
        except SQLAlchemyError as exc:
            logger.error(f"Soft delete failed for slot {slot_id}: {exc}")
            raise InternalFailure() from exc

        logger.info(f"Slot {slot_id} deactivated")

    async def hard_delete_slot(self, slot_id: UUID) -> None:
        try:
            async with self.session.begin():
                if self.hard_delete_policy == HARD_DELETE_BLOCK:
                    # Same lock as the allocator, so no booking slips in after the check
                    locked = await lock_slot(self.session, slot_id)
                    if locked is None:
                        raise SlotNotFound(slot_id)
                    confirmed_count = await locked.count_confirmed()
                    if confirmed_count > 0:
                        raise SlotHasConfirmedBookings(slot_id, confirmed_count)
                else:
                    confirmed_count = await self._count_confirmed(slot_id)

                result = await self.session.execute(delete(Slot).where(Slot.id == slot_id))
                if result.rowcount == 0:
                    raise SlotNotFound(slot_id)
        except SQLAlchemyError as exc:
            logger.error(f"Hard delete failed for slot {slot_id}: {exc}")
            raise InternalFailure() from exc

        if confirmed_count:
            logger.warning(f"Slot {slot_id} deleted with {confirmed_count} confirmed bookings")
        else:
            logger.info(f"Slot {slot_id} deleted")

    async def delete_doctor(self, doctor_id: UUID) -> None:
        try:
            async with self.session.begin():
                doctor = await self.session.get(Doctor, doctor_id)
                if not doctor:
                    raise DoctorNotFound(doctor_id)
                # Slots and their bookings are removed by ON DELETE CASCADE
                await self.session.execute(delete(Doctor).where(Doctor.id == doctor_id))
        except SQLAlchemyError as exc:
            logger.error(f"Delete failed for doctor {doctor_id}: {exc}")
            raise InternalFailure() from exc

        logger.info(f"Doctor {doctor_id} deleted with all slots and bookings")
