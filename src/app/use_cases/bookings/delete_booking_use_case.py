"""
Delete Booking Use Case

Removes a booking and gives its consumed session credit back.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork

from .dtos import BookingResponse, DeleteBookingResponse

logger = logging.getLogger(__name__)


class DeleteBookingUseCase:
    """
    Use case for delete-and-restore.

    Business Rules:
    - Admin only, within the caller's tenant
    - Rejected while the tenant's subscription is inactive
    - The row removal and the credit restore happen in one transaction
      through the ledger; a failed restore leaves the booking in place
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: CallerContext, booking_id: UUID
    ) -> Result[DeleteBookingResponse]:
        if not caller.is_admin:
            return Return.err(Error("forbidden", "Only admins can delete bookings"))

        async with self.uow:
            booking = await self.uow.bookings.get_by_id(booking_id)
            if booking is None:
                return Return.err(Error("booking_not_found", "Booking not found"))
            if booking.tenant_id != caller.tenant_id:
                return Return.err(Error("tenant_mismatch", "Booking belongs to another tenant"))

            tenant = await self.uow.tenants.get_by_id(caller.tenant_id)
            if tenant is None or not tenant.is_active:
                return Return.err(
                    Error("subscription_inactive", "Studio subscription is not active")
                )

            snapshot = BookingResponse.from_entity(booking)

            restored = await self.uow.ledger.restore(booking_id)
            if restored.is_err():
                await self.uow.rollback()
                return Return.err(restored.error)

            await self.uow.commit()

        logger.info(
            f"Booking {booking_id} deleted by {caller.user_id}; "
            f"restored_sessions={restored.value.restored_sessions}"
        )
        return Return.ok(
            DeleteBookingResponse(
                booking=snapshot,
                restored_sessions=restored.value.restored_sessions,
            )
        )
