from fastapi import APIRouter, Depends, status
from uuid import UUID

from app.api.deps import get_booking_service
from app.core.exceptions import BookingNotFound
from app.schemas.booking import BookingCreate, BookingEnvelope
from app.services.booking_service import BookingService

router = APIRouter()

@router.post("", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: BookingCreate,
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.create_booking(request.slot_id, request.user_name)
    return {"booking": booking}

@router.get("/{booking_id}", response_model=BookingEnvelope)
async def read_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.get_booking(booking_id)
    if not booking:
        raise BookingNotFound(booking_id)
    return {"booking": booking}
