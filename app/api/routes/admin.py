from fastapi import APIRouter, Depends, status
from uuid import UUID

from app.api.deps import get_doctor_service, get_lifecycle_service, get_slot_service
from app.schemas.base import MessageResponse
from app.schemas.doctor import DoctorCreate, DoctorEnvelope, DoctorListEnvelope
from app.schemas.slot import CreatedSlotEnvelope, SlotCapacityUpdate, SlotCreate, SlotEnvelope
from app.services.doctor_service import DoctorService
from app.services.lifecycle_service import LifecycleService
from app.services.slot_service import SlotService

router = APIRouter()

@router.post("/doctors", response_model=DoctorEnvelope, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorCreate,
    service: DoctorService = Depends(get_doctor_service)
):
    return {"doctor": await service.create_doctor(doctor_data)}

@router.get("/doctors", response_model=DoctorListEnvelope)
async def read_doctors(service: DoctorService = Depends(get_doctor_service)):
    return {"doctors": await service.get_doctors()}

@router.delete("/doctors/{doctor_id}", response_model=MessageResponse)
async def delete_doctor(
    doctor_id: UUID,
    service: LifecycleService = Depends(get_lifecycle_service)
):
    await service.delete_doctor(doctor_id)
    return MessageResponse(message="Doctor deleted successfully.")

@router.post("/slots", response_model=CreatedSlotEnvelope, status_code=status.HTTP_201_CREATED)
async def create_slot(
    slot_data: SlotCreate,
    service: SlotService = Depends(get_slot_service)
):
    return {"slot": await service.create_slot(slot_data)}

@router.patch("/slots/{slot_id}", response_model=SlotEnvelope)
async def update_slot(
    slot_id: UUID,
    update: SlotCapacityUpdate,
    service: LifecycleService = Depends(get_lifecycle_service)
):
    return {"slot": await service.update_slot_capacity(slot_id, update.capacity)}

@router.patch("/slots/{slot_id}/soft-delete", response_model=MessageResponse)
async def soft_delete_slot(
    slot_id: UUID,
    service: LifecycleService = Depends(get_lifecycle_service)
):
    await service.soft_delete_slot(slot_id)
    return MessageResponse(message="Slot soft-deleted (inactive).")

@router.delete("/slots/{slot_id}", response_model=MessageResponse)
async def hard_delete_slot(
    slot_id: UUID,
    service: LifecycleService = Depends(get_lifecycle_service)
):
    await service.hard_delete_slot(slot_id)
    return MessageResponse(message="Slot deleted permanently.")
