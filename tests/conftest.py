"""
Shared pytest fixtures.

Every test gets its own file-backed SQLite database. Sessions are opened per
step and closed straight away: SQLite transactions hold the database write
lock, so a session left open would block the code under test.
"""
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.db.session import Database
from app.main import create_app
from app.schemas.doctor import DoctorCreate
from app.schemas.slot import SlotCreate
from app.services.booking_service import BookingService
from app.services.doctor_service import DoctorService
from app.services.slot_service import SlotService

SLOT_START = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'clinicslots.db'}"


@pytest.fixture
def settings(db_url) -> Settings:
    return Settings(DATABASE_URL=db_url, AUTO_CREATE_TABLES=False)


@pytest_asyncio.fixture
async def database(db_url):
    db = Database(db_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def client(database, settings):
    app = create_app(settings=settings, database=database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_doctor(database):
    async def _make_doctor(name: str = "Dr. Meredith Grey", specialization: str = "General Surgery"):
        async with database.session() as session:
            return await DoctorService(session).create_doctor(
                DoctorCreate(name=name, specialization=specialization)
            )
    return _make_doctor


@pytest_asyncio.fixture
async def doctor(make_doctor):
    return await make_doctor()


@pytest.fixture
def make_slot(database, doctor):
    async def _make_slot(capacity: int = 1, start: datetime = SLOT_START, doctor_id=None):
        async with database.session() as session:
            return await SlotService(session).create_slot(
                SlotCreate(
                    doctor_id=doctor_id or doctor.id,
                    start_time=start,
                    end_time=start + timedelta(hours=1),
                    capacity=capacity,
                )
            )
    return _make_slot


@pytest.fixture
def book(database):
    async def _book(slot_id, user_name: str = "Alice", **service_kwargs):
        async with database.session() as session:
            return await BookingService(session, **service_kwargs).create_booking(slot_id, user_name)
    return _book


@pytest.fixture
def read_slot(database):
    async def _read_slot(slot_id, include_inactive: bool = False):
        async with database.session() as session:
            return await SlotService(session).get_slot(slot_id, include_inactive=include_inactive)
    return _read_slot


@pytest.fixture
def read_booking(database):
    async def _read_booking(booking_id):
        async with database.session() as session:
            return await BookingService(session).get_booking(booking_id)
    return _read_booking
