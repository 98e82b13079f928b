"""
Booking Use Case DTOs (Data Transfer Objects)

All Response classes for the booking domain.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Booking


# ============================================================================
# Response DTOs
# ============================================================================


class BookingResponse(BaseModel):
    """Booking as returned to callers"""

    id: str
    tenant_id: str
    session_id: str
    user_id: str
    status: str
    booking_type: str
    membership_id: Optional[str] = None
    drop_in_price: Optional[Decimal] = None
    drop_in_paid: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=str(booking.id),
            tenant_id=str(booking.tenant_id),
            session_id=str(booking.session_id),
            user_id=str(booking.user_id),
            status=booking.status.value,
            booking_type=booking.booking_type.value,
            membership_id=str(booking.membership_id) if booking.membership_id else None,
            drop_in_price=booking.drop_in_price,
            drop_in_paid=booking.drop_in_paid,
            created_at=booking.created_at,
        )


class BookingEnvelope(BaseModel):
    """Response for admission, check-in, update and read use cases"""

    ok: bool = True
    booking: BookingResponse


class DeleteBookingResponse(BaseModel):
    """Response for delete-and-restore use case"""

    ok: bool = True
    booking: BookingResponse
    restored_sessions: int


class NoShowSweepResponse(BaseModel):
    """Response for no-show sweep use case"""

    ok: bool = True
    sessions_closed: int
    bookings_marked: int


class EligibilityResponse(BaseModel):
    """Response for eligibility preview use case"""

    outcome: str
    booking_type: Optional[str] = None
    membership_id: Optional[str] = None
    plan_kind: Optional[str] = None
    reason: Optional[str] = None
