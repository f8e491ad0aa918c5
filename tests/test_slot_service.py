from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from app.core.exceptions import DoctorNotFound
from app.db.models import BookingStatus
from app.schemas.slot import SlotCreate
from app.services.lifecycle_service import LifecycleService
from app.services.slot_service import SlotService

SLOT_START = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_create_slot(doctor, make_slot):
    slot = await make_slot(capacity=3)

    assert slot.doctor_id == doctor.id
    assert slot.capacity == 3
    assert slot.is_active is True
    assert slot.end_time - slot.start_time == timedelta(hours=1)


@pytest.mark.asyncio
async def test_create_slot_normalises_aware_times(database, doctor):
    start = datetime(2025, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    async with database.session() as session:
        slot = await SlotService(session).create_slot(
            SlotCreate(doctor_id=doctor.id, start_time=start, end_time=start + timedelta(hours=1), capacity=1)
        )

    assert slot.start_time == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert slot.end_time == datetime(2025, 1, 1, 11, 0, tzinfo=timezone.utc)
    assert slot.start_time.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_naive_times_are_taken_as_utc(database, doctor, read_slot):
    start = datetime(2025, 1, 1, 10, 0)
    async with database.session() as session:
        slot = await SlotService(session).create_slot(
            SlotCreate(doctor_id=doctor.id, start_time=start, end_time=start + timedelta(hours=1), capacity=1)
        )

    view = await read_slot(slot.id)
    assert view.start_time == SLOT_START
    assert view.start_time.tzinfo is not None
    assert view.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_create_slot_for_unknown_doctor(database):
    async with database.session() as session:
        with pytest.raises(DoctorNotFound):
            await SlotService(session).create_slot(
                SlotCreate(doctor_id=uuid4(), start_time=SLOT_START, end_time=SLOT_START, capacity=1)
            )


@pytest.mark.asyncio
async def test_listing_joins_doctor_and_bookings(database, doctor, make_slot, book):
    slot = await make_slot(capacity=3)
    alice = await book(slot.id, "Alice")
    bob = await book(slot.id, "Bob")

    async with database.session() as session:
        slots = await SlotService(session).list_active_slots()

    assert len(slots) == 1
    view = slots[0]
    assert view.id == slot.id
    assert view.doctor_name == doctor.name
    assert view.doctor_specialization == doctor.specialization
    assert view.confirmed_count == 2
    assert view.available_seats == 1
    assert [b.id for b in view.bookings] == [alice.id, bob.id]
    assert all(b.status == BookingStatus.CONFIRMED for b in view.bookings)


@pytest.mark.asyncio
async def test_listing_is_ordered_by_start_time(database, make_slot):
    late = await make_slot(start=SLOT_START + timedelta(days=1))
    early = await make_slot(start=SLOT_START)
    middle = await make_slot(start=SLOT_START + timedelta(hours=3))

    async with database.session() as session:
        slots = await SlotService(session).list_active_slots()

    assert [s.id for s in slots] == [early.id, middle.id, late.id]


@pytest.mark.asyncio
async def test_slot_without_bookings_has_full_availability(make_slot, read_slot):
    slot = await make_slot(capacity=4)

    view = await read_slot(slot.id)

    assert view.confirmed_count == 0
    assert view.available_seats == 4
    assert view.bookings == []


@pytest.mark.asyncio
async def test_repeated_reads_agree(make_slot, book, read_slot):
    slot = await make_slot(capacity=2)
    await book(slot.id, "Alice")

    first = await read_slot(slot.id)
    second = await read_slot(slot.id)

    assert first.available_seats == second.available_seats == 1
    assert first == second


@pytest.mark.asyncio
async def test_unknown_slot_reads_as_none(read_slot):
    assert await read_slot(uuid4()) is None


@pytest.mark.asyncio
async def test_available_seats_goes_negative_after_capacity_cut(database, make_slot, book, read_slot):
    slot = await make_slot(capacity=3)
    for name in ("Alice", "Bob", "Carol"):
        await book(slot.id, name)

    async with database.session() as session:
        updated = await LifecycleService(session).update_slot_capacity(slot.id, 1)

    assert updated.capacity == 1
    assert updated.confirmed_count == 3
    assert updated.available_seats == -2

    view = await read_slot(slot.id)
    assert view.available_seats == view.capacity - view.confirmed_count == -2
