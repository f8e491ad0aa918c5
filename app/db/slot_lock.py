"""
Row lock on a slot, the single gate for writing bookings.

The no-overbooking guarantee depends on every booking insert happening while
the slot row is held with SELECT ... FOR UPDATE. ``LockedSlot`` makes that a
requirement of the call signature: the only way to count or insert bookings
for a slot is through a handle, and the only way to get a handle is
:func:`lock_slot`.
"""
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import func, select

from app.core.utils import utcnow
from app.db.models import Booking, BookingStatus, Slot

_LOCK_TOKEN = object()


class LockedSlot:
    __slots__ = ("slot", "_session")

    def __init__(self, slot: Slot, session: AsyncSession, token: object):
        if token is not _LOCK_TOKEN:
            raise TypeError("LockedSlot is only created by lock_slot()")
        self.slot = slot
        self._session = session

    @property
    def id(self) -> UUID:
        return self.slot.id

    @property
    def capacity(self) -> int:
        return self.slot.capacity

    def _ensure_held(self) -> None:
        if not self._session.in_transaction():
            raise RuntimeError("Slot lock was released; lock the slot again")

    async def count_confirmed(self) -> int:
        self._ensure_held()
        stmt = select(func.count(Booking.id)).where(
            Booking.slot_id == self.slot.id,
            Booking.status == BookingStatus.CONFIRMED,
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def insert_booking(self, user_name: str) -> Booking:
        self._ensure_held()
        now = utcnow()
        booking = Booking(
            id=uuid4(),
            slot_id=self.slot.id,
            user_name=user_name,
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )
        self._session.add(booking)
        await self._session.flush()
        return booking


async def lock_slot(session: AsyncSession, slot_id: UUID) -> Optional[LockedSlot]:
    """
    Take an exclusive lock on the slot row for the rest of the transaction.

    Blocks while another transaction holds the same row. Returns None if the
    slot does not exist.
    """
    if not session.in_transaction():
        raise RuntimeError("lock_slot() must be called inside a transaction")

    # populate_existing so a slot already in the identity map is re-read under the lock
    stmt = (
        select(Slot)
        .where(Slot.id == slot_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    slot = result.scalars().first()
    if slot is None:
        return None
    return LockedSlot(slot, session, _LOCK_TOKEN)
