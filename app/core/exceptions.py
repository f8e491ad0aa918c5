"""
Domain errors raised by the booking services.

Each error carries the HTTP status and a stable code so the API layer can
translate it without inspecting messages. ``message`` is always safe to show
to a client.
"""
from typing import Optional
from uuid import UUID


class BookingSystemError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_FAILURE"
    message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(BookingSystemError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found."


class SlotNotFound(NotFoundError):
    code = "SLOT_NOT_FOUND"
    message = "Slot not found."

    def __init__(self, slot_id: UUID):
        self.slot_id = slot_id
        super().__init__()


class DoctorNotFound(NotFoundError):
    code = "DOCTOR_NOT_FOUND"
    message = "Doctor not found."

    def __init__(self, doctor_id: UUID):
        self.doctor_id = doctor_id
        super().__init__()


class BookingNotFound(NotFoundError):
    code = "BOOKING_NOT_FOUND"
    message = "Booking not found."

    def __init__(self, booking_id: UUID):
        self.booking_id = booking_id
        super().__init__()


class ConflictError(BookingSystemError):
    status_code = 409
    code = "CONFLICT"
    message = "Request conflicts with the current state."


class SlotFull(ConflictError):
    code = "SLOT_FULL"
    message = "Slot is full."

    def __init__(self, slot_id: UUID, capacity: int):
        self.slot_id = slot_id
        self.capacity = capacity
        super().__init__()


class SlotHasConfirmedBookings(ConflictError):
    code = "SLOT_HAS_CONFIRMED_BOOKINGS"
    message = "Slot has confirmed bookings and cannot be deleted."

    def __init__(self, slot_id: UUID, confirmed_count: int):
        self.slot_id = slot_id
        self.confirmed_count = confirmed_count
        super().__init__()


class InternalFailure(BookingSystemError):
    """Persistence failure not anticipated by the domain model.

    The underlying exception is kept as ``__cause__`` for logging only.
    """
