from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from app.core.exceptions import InternalFailure, SlotFull, SlotNotFound
from app.core.logger import logger
from app.db.models import Booking
from app.db.slot_lock import lock_slot

class BookingService:
    """
    Seat allocation for slots.

    A booking is confirmed only if, with the slot row locked, the number of
    confirmed bookings is still below the slot capacity. Competing requests
    for the same slot queue on the row lock; requests for different slots
    never wait on each other.
    """

    def __init__(
        self,
        session: AsyncSession,
        lock_timeout_ms: int = 0,
        allow_inactive_slots: bool = True,
    ):
        self.session = session
        self.lock_timeout_ms = lock_timeout_ms
        self.allow_inactive_slots = allow_inactive_slots

    async def _set_lock_timeout(self) -> None:
        if self.lock_timeout_ms <= 0:
            return
        if self.session.bind.dialect.name != "postgresql":
            return
        # SET does not take bind parameters; the value is an int from settings
        await self.session.execute(text(f"SET LOCAL lock_timeout = '{int(self.lock_timeout_ms)}ms'"))

    async def create_booking(self, slot_id: UUID, user_name: str) -> Booking:
        try:
            async with self.session.begin():
                await self._set_lock_timeout()

                # 1. Lock the slot row; competing bookings wait here
                locked = await lock_slot(self.session, slot_id)
                if locked is None:
                    raise SlotNotFound(slot_id)
                if not self.allow_inactive_slots and locked.slot.is_active is False:
                    raise SlotNotFound(slot_id)

                # 2. Count under the lock
                confirmed_count = await locked.count_confirmed()
                if confirmed_count >= locked.capacity:
                    raise SlotFull(slot_id, locked.capacity)

                # 3. Insert; commit on leaving the block releases the lock
                booking = await locked.insert_booking(user_name)
        except (SlotNotFound, SlotFull) as exc:
            logger.warning(f"Booking rejected for slot {slot_id}: {exc.message}")
            raise
        except SQLAlchemyError as exc:
            logger.error(f"Booking transaction failed for slot {slot_id}: {exc}")
            raise InternalFailure() from exc

        logger.info(
            f"Booking {booking.id} confirmed for slot {slot_id} "
            f"({confirmed_count + 1}/{locked.capacity})"
        )
        return booking

    async def get_booking(self, booking_id: UUID) -> Optional[Booking]:
        return await self.session.get(Booking, booking_id)
