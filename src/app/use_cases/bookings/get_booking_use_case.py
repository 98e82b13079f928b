from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork

from .dtos import BookingEnvelope, BookingResponse


class GetBookingUseCase:
    """Tenant-scoped read; members only see their own bookings"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: CallerContext, booking_id: UUID) -> Result[BookingEnvelope]:
        async with self.uow:
            booking = await self.uow.bookings.get_by_id(booking_id)
            if booking is None:
                return Return.err(Error("booking_not_found", "Booking not found"))
            if booking.tenant_id != caller.tenant_id:
                return Return.err(Error("tenant_mismatch", "Booking belongs to another tenant"))
            if not caller.is_admin and booking.user_id != caller.user_id:
                return Return.err(Error("booking_not_found", "Booking not found"))

            return Return.ok(BookingEnvelope(booking=BookingResponse.from_entity(booking)))
