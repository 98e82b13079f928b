"""
Update Booking Use Case

Status changes (cancel, no-show) and session reassignment of an existing
booking.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Booking, BookingStatus

from .dtos import BookingEnvelope, BookingResponse

logger = logging.getLogger(__name__)

# Target statuses reachable from each status through this use case.
# checked_in is only reachable through the check-in gate.
ALLOWED_TRANSITIONS = {
    BookingStatus.booked: {BookingStatus.cancelled, BookingStatus.no_show},
    BookingStatus.checked_in: set(),
    BookingStatus.no_show: set(),
    BookingStatus.cancelled: set(),
}


class UpdateBookingUseCase:
    """
    Use case for changing a booking's status or session.

    Business Rules:
    - Members may only cancel their own bookings
    - No-show and reassignment are admin only
    - Cancel is allowed until starts_at - cutoff (inclusive); no credit is
      given back on cancel
    - Reassignment needs a live booking and a free seat in the destination
      session; the booking's own seat is not counted
    - Setting the current status again is a no-op
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cancel_cutoff: timedelta = timedelta(minutes=120),
        clock: Callable = utcnow,
    ):
        self.uow = uow
        self.cancel_cutoff = cancel_cutoff
        self.clock = clock

    async def execute(
        self,
        caller: CallerContext,
        booking_id: UUID,
        status: Optional[str] = None,
        session_id: Optional[UUID] = None,
    ) -> Result[BookingEnvelope]:
        """
        Execute booking update.

        Args:
            caller: Resolved identity of the requester
            booking_id: Booking to change
            status: Optional target status
            session_id: Optional destination session (reassignment)

        Returns:
            Result with BookingEnvelope, or Error
        """
        if status is None and session_id is None:
            return Return.err(Error("missing_fields", "Provide status and/or session_id"))

        target_status = None
        if status is not None:
            try:
                target_status = BookingStatus(status.lower())
            except ValueError:
                valid = ", ".join(s.value for s in BookingStatus)
                return Return.err(
                    Error("invalid_status", f"Invalid status: {status}. Must be one of: {valid}")
                )

        if session_id is not None and not caller.is_admin:
            return Return.err(Error("forbidden", "Only admins can move bookings"))
        if target_status == BookingStatus.no_show and not caller.is_admin:
            return Return.err(Error("forbidden", "Only admins can mark no-shows"))

        now = self.clock()

        async with self.uow:
            booking = await self.uow.bookings.get_by_id(booking_id)
            if booking is None:
                return Return.err(Error("booking_not_found", "Booking not found"))
            if booking.tenant_id != caller.tenant_id:
                return Return.err(Error("tenant_mismatch", "Booking belongs to another tenant"))
            if not caller.is_admin and booking.user_id != caller.user_id:
                return Return.err(Error("forbidden", "Members can only change their own bookings"))

            if session_id is not None and session_id != booking.session_id:
                error = await self._reassign(booking, session_id)
                if error is not None:
                    await self.uow.rollback()
                    return Return.err(error)

            if target_status is not None and target_status != booking.status:
                error = await self._change_status(booking, target_status, now)
                if error is not None:
                    await self.uow.rollback()
                    return Return.err(error)

            booking = await self.uow.bookings.update(booking)
            await self.uow.commit()

            logger.info(f"Booking {booking.id} updated: status={booking.status.value}")
            return Return.ok(BookingEnvelope(booking=BookingResponse.from_entity(booking)))

    async def _reassign(self, booking: Booking, session_id: UUID) -> Optional[Error]:
        if not booking.is_live:
            return Error("booking_not_live", "Only booked or checked-in bookings can be moved")

        destination = await self.uow.class_sessions.get_by_id(session_id, for_update=True)
        if destination is None:
            return Error("session_not_found", "Session not found")
        if destination.tenant_id != booking.tenant_id:
            return Error("session_wrong_tenant", "Session belongs to another tenant")

        if destination.is_capacity_limited:
            taken = await self.uow.bookings.count_live(
                booking.tenant_id, session_id, exclude_booking_id=booking.id
            )
            if taken >= destination.capacity:
                return Error("session_full", "Session is full")

        booking.session_id = session_id
        try:
            await self.uow.bookings.update(booking)
        except IntegrityError:
            return Error("already_booked", "Member already has a booking for this session")

        if destination.is_capacity_limited:
            taken = await self.uow.bookings.count_live(booking.tenant_id, session_id)
            if taken > destination.capacity:
                return Error("session_full", "Session is full")
        return None

    async def _change_status(
        self, booking: Booking, target: BookingStatus, now: datetime
    ) -> Optional[Error]:
        if target not in ALLOWED_TRANSITIONS[booking.status]:
            return Error(
                "invalid_status_transition",
                f"Cannot change booking from {booking.status.value} to {target.value}",
            )

        if target == BookingStatus.cancelled:
            session = await self.uow.class_sessions.get_by_id(booking.session_id)
            if session is None:
                return Error("session_not_found", "Session not found")
            deadline = session.cancel_deadline(self.cancel_cutoff)
            if now > deadline:
                return Error(
                    "cancel_deadline_passed",
                    "The cancellation deadline for this session has passed",
                    {"deadline": deadline.isoformat()},
                )

        booking.status = target
        return None
