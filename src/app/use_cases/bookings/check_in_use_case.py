"""
Check-in Use Case

Marks a member as attended for a session, creating a walk-in booking when
none exists and charging a session credit when the booking has not been
charged yet.
"""

import logging
from datetime import timedelta
from typing import Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Booking, BookingStatus, BookingType, Checkin

from .dtos import BookingEnvelope, BookingResponse

logger = logging.getLogger(__name__)


class CheckInUseCase:
    """
    Use case for the booked -> checked_in transition.

    Business Rules:
    - Admin only
    - Only inside [starts_at - opens_before, ends_at + closes_after]
      (or starts_at + fallback when the session has no end time)
    - No booking yet: a walk-in membership booking is created first,
      subject to the session's capacity
    - Already checked in: no-op
    - Membership booking without a consumed credit: ledger consume first;
      ledger_unavailable is tolerated, any other ledger error aborts
    """

    def __init__(
        self,
        uow: UnitOfWork,
        opens_before: timedelta = timedelta(minutes=15),
        closes_after: timedelta = timedelta(minutes=30),
        fallback: timedelta = timedelta(minutes=120),
        clock: Callable = utcnow,
    ):
        self.uow = uow
        self.opens_before = opens_before
        self.closes_after = closes_after
        self.fallback = fallback
        self.clock = clock

    async def execute(
        self, caller: CallerContext, session_id: UUID, user_id: UUID
    ) -> Result[BookingEnvelope]:
        """
        Execute check-in.

        Args:
            caller: Resolved identity of the requester (must be admin)
            session_id: Session being attended
            user_id: Member checking in

        Returns:
            Result with BookingEnvelope, or Error
        """
        if not caller.is_admin:
            return Return.err(Error("forbidden", "Only admins can check members in"))

        tenant_id = caller.tenant_id
        now = self.clock()

        async with self.uow:
            session = await self.uow.class_sessions.get_by_id(session_id, for_update=True)
            if session is None:
                return Return.err(Error("session_not_found", "Session not found"))
            if session.tenant_id != tenant_id:
                return Return.err(
                    Error("session_wrong_tenant", "Session belongs to another tenant")
                )

            opens_at, closes_at = session.checkin_window(
                self.opens_before, self.closes_after, self.fallback
            )
            if now < opens_at or now > closes_at:
                return Return.err(
                    Error(
                        "outside_checkin_window",
                        "Check-in is not open for this session",
                        {
                            "opens_at": opens_at.isoformat(),
                            "closes_at": closes_at.isoformat(),
                        },
                    )
                )

            profile = await self.uow.profiles.get_by_id(user_id)
            if profile is None or profile.tenant_id != tenant_id:
                return Return.err(
                    Error("target_user_wrong_tenant", "Member does not belong to this tenant")
                )

            booking = await self.uow.bookings.get_latest_not_cancelled(
                tenant_id, session_id, user_id
            )

            if booking is not None and booking.status == BookingStatus.checked_in:
                return Return.ok(BookingEnvelope(booking=BookingResponse.from_entity(booking)))

            if booking is None:
                # Walk-in: seat the member first
                if session.is_capacity_limited:
                    taken = await self.uow.bookings.count_live(tenant_id, session_id)
                    if taken >= session.capacity:
                        return Return.err(Error("session_full", "Session is full"))
                try:
                    booking = await self.uow.bookings.create(
                        Booking(
                            tenant_id=tenant_id,
                            session_id=session_id,
                            user_id=user_id,
                            status=BookingStatus.booked,
                            booking_type=BookingType.membership,
                        )
                    )
                except IntegrityError:
                    await self.uow.rollback()
                    return Return.err(
                        Error("already_booked", "Member already has a booking for this session")
                    )
                if session.is_capacity_limited:
                    taken = await self.uow.bookings.count_live(tenant_id, session_id)
                    if taken > session.capacity:
                        await self.uow.rollback()
                        return Return.err(Error("session_full", "Session is full"))

            if booking.booking_type == BookingType.membership and not booking.has_consumed_credit:
                consumed = await self.uow.ledger.consume(tenant_id, user_id, booking.id)
                if consumed.is_err():
                    if consumed.error.code != "ledger_unavailable":
                        await self.uow.rollback()
                        return Return.err(consumed.error)
                    logger.warning(
                        f"No credit ledger configured; checking in booking {booking.id} "
                        f"without consuming a credit"
                    )

            attendance = await self.uow.checkins.get(tenant_id, session_id, user_id)
            if attendance is None:
                await self.uow.checkins.create(
                    Checkin(tenant_id=tenant_id, session_id=session_id, user_id=user_id)
                )

            booking.status = BookingStatus.checked_in
            booking = await self.uow.bookings.update(booking)

            await self.uow.commit()

            return Return.ok(BookingEnvelope(booking=BookingResponse.from_entity(booking)))
