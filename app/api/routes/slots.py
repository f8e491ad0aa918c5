from fastapi import APIRouter, Depends
from uuid import UUID

from app.api.deps import get_slot_service
from app.core.exceptions import SlotNotFound
from app.schemas.slot import SlotEnvelope, SlotListEnvelope
from app.services.slot_service import SlotService

router = APIRouter()

@router.get("", response_model=SlotListEnvelope)
async def read_slots(service: SlotService = Depends(get_slot_service)):
    return {"slots": await service.list_active_slots()}

@router.get("/{slot_id}", response_model=SlotEnvelope)
async def read_slot(slot_id: UUID, service: SlotService = Depends(get_slot_service)):
    slot = await service.get_slot(slot_id)
    if slot is None:
        raise SlotNotFound(slot_id)
    return {"slot": slot}
