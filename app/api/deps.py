from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.services.booking_service import BookingService
from app.services.doctor_service import DoctorService
from app.services.lifecycle_service import LifecycleService
from app.services.slot_service import SlotService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    # One pooled connection per request, released when the request ends
    async with request.app.state.database.session() as session:
        yield session


async def get_booking_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(
        session,
        lock_timeout_ms=settings.BOOKING_LOCK_TIMEOUT_MS,
        allow_inactive_slots=settings.ALLOW_BOOKING_INACTIVE_SLOTS,
    )


async def get_slot_service(session: AsyncSession = Depends(get_session)) -> SlotService:
    return SlotService(session)


async def get_doctor_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> DoctorService:
    return DoctorService(session, list_limit=settings.DOCTOR_LIST_LIMIT)


async def get_lifecycle_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> LifecycleService:
    return LifecycleService(session, hard_delete_policy=settings.SLOT_HARD_DELETE_POLICY)
