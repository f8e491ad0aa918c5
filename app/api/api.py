from fastapi import APIRouter
from app.api.routes import admin, bookings, slots

api_router = APIRouter()

api_router.include_router(slots.router, prefix="/slots", tags=["slots"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
