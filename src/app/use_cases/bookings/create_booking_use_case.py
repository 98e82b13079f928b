"""
Create Booking Use Case (admission)

Turns a booking request into a persisted booking, or fails with a stable
error token and no partial state.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.eligibility import EligibilityEvaluator, EligibilityOutcome
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    Booking,
    BookingStatus,
    BookingType,
    ClassSession,
    MemberNotification,
)

from .dtos import BookingEnvelope, BookingResponse

logger = logging.getLogger(__name__)


class CreateBookingUseCase:
    """
    Use case for booking a member into a class session.

    Business Rules:
    - Members book only for themselves, inside their own tenant
    - Admins must name the member, who must belong to the tenant
    - Preconditions, in order: session, class, duplicate, capacity, eligibility
    - A sessions-plan booking consumes one credit through the ledger; if that
      fails the booking row is removed again and the ledger error is returned
    - Capacity is re-verified after the insert inside the same transaction
    - The inbox notification is best-effort and never undoes the booking
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        session_id: UUID,
        user_id: Optional[UUID] = None,
        booking_type: Optional[str] = None,
    ) -> Result[BookingEnvelope]:
        """
        Execute admission.

        Args:
            caller: Resolved identity of the requester
            tenant_id: Tenant the booking is made in
            session_id: Class session to book
            user_id: Member to book (required for admins, ignored for members)
            booking_type: Optional requested mode ("membership" or "drop_in")

        Returns:
            Result with BookingEnvelope, or Error
        """
        requested_type = None
        if booking_type is not None:
            try:
                requested_type = BookingType(booking_type.lower())
            except ValueError:
                return Return.err(
                    Error(
                        "invalid_booking_type",
                        f"Invalid booking type: {booking_type}. Must be one of: membership, drop_in",
                    )
                )

        if tenant_id != caller.tenant_id:
            return Return.err(
                Error("tenant_mismatch", "Cannot book outside your own tenant")
            )

        if caller.is_admin:
            if user_id is None:
                return Return.err(
                    Error("user_id_required_for_admin", "Admins must specify user_id")
                )
            target_user_id = user_id
        else:
            target_user_id = caller.user_id

        now = self.clock()

        async with self.uow:
            if caller.is_admin:
                profile = await self.uow.profiles.get_by_id(target_user_id)
                if profile is None or profile.tenant_id != tenant_id:
                    return Return.err(
                        Error(
                            "target_user_wrong_tenant",
                            "Member does not belong to this tenant",
                        )
                    )

            # 1. Session (locked so competing admissions queue up on it)
            session = await self.uow.class_sessions.get_by_id(session_id, for_update=True)
            if session is None:
                return Return.err(Error("session_not_found", "Session not found"))
            if session.tenant_id != tenant_id:
                return Return.err(
                    Error("session_wrong_tenant", "Session belongs to another tenant")
                )

            # 2. Owning class
            studio_class = await self.uow.classes.get_by_id(session.class_id)
            if studio_class is None:
                return Return.err(Error("class_not_found", "Class not found"))
            if studio_class.tenant_id != tenant_id:
                return Return.err(
                    Error("class_wrong_tenant", "Class belongs to another tenant")
                )

            # 3. Duplicate
            existing = await self.uow.bookings.get_live(tenant_id, session_id, target_user_id)
            if existing is not None:
                return Return.err(
                    Error("already_booked", "Member already has a booking for this session")
                )

            # 4. Capacity
            if await self._is_full(session, tenant_id):
                return Return.err(Error("session_full", "Session is full"))

            # 5. Eligibility
            evaluator = EligibilityEvaluator(self.uow)
            decision = await evaluator.evaluate(
                tenant_id,
                target_user_id,
                studio_class,
                now,
                requested_type=requested_type,
                is_admin=caller.is_admin,
            )
            if decision.outcome == EligibilityOutcome.ineligible:
                return Return.err(
                    Error(decision.reason, "Member is not eligible to book this class")
                )

            final_type = decision.booking_type
            booking = Booking(
                tenant_id=tenant_id,
                session_id=session_id,
                user_id=target_user_id,
                status=BookingStatus.booked,
                booking_type=final_type,
                drop_in_price=(
                    studio_class.drop_in_price if final_type == BookingType.drop_in else None
                ),
                drop_in_paid=False,
            )

            try:
                booking = await self.uow.bookings.create(booking)
            except IntegrityError:
                # Lost the race against a concurrent booking for the same member
                await self.uow.rollback()
                return Return.err(
                    Error("already_booked", "Member already has a booking for this session")
                )

            if await self._is_overbooked(session, tenant_id):
                await self.uow.rollback()
                return Return.err(Error("session_full", "Session is full"))

            if decision.consumes_credit:
                consumed = await self.uow.ledger.consume(tenant_id, target_user_id, booking.id)
                if consumed.is_err():
                    await self._compensate(booking, consumed.error)
                    return Return.err(consumed.error)

            await self.uow.commit()
            response = BookingEnvelope(booking=BookingResponse.from_entity(booking))
            starts_at = session.starts_at

        await self._notify_booked(response.booking, starts_at)
        return Return.ok(response)

    async def _is_full(self, session: ClassSession, tenant_id: UUID) -> bool:
        if not session.is_capacity_limited:
            return False
        taken = await self.uow.bookings.count_live(tenant_id, session.id)
        return taken >= session.capacity

    async def _is_overbooked(self, session: ClassSession, tenant_id: UUID) -> bool:
        if not session.is_capacity_limited:
            return False
        taken = await self.uow.bookings.count_live(tenant_id, session.id)
        return taken > session.capacity

    async def _compensate(self, booking: Booking, error: Error) -> None:
        logger.warning(
            f"Credit consumption failed for booking {booking.id} ({error.code}); "
            f"removing booking"
        )
        try:
            await self.uow.bookings.delete(booking)
        except SQLAlchemyError as exc:
            logger.warning(f"Compensating delete failed for booking {booking.id}: {exc}")
        await self.uow.rollback()

    async def _notify_booked(self, booking: BookingResponse, starts_at: datetime) -> None:
        try:
            async with self.uow:
                await self.uow.notifications.create(
                    MemberNotification(
                        tenant_id=UUID(booking.tenant_id),
                        user_id=UUID(booking.user_id),
                        kind="booking_created",
                        title="Booking confirmed",
                        body=f"You are booked for {starts_at:%Y-%m-%d %H:%M}",
                        payload={
                            "booking_id": booking.id,
                            "session_id": booking.session_id,
                        },
                    )
                )
                await self.uow.commit()
        except SQLAlchemyError as exc:
            logger.warning(f"Booking notification failed for {booking.id}: {exc}")
