"""
SQL implementation of the session-credit ledger.

Every credit movement is a single conditional UPDATE evaluated by the
database, so two transactions can never both decrement the last credit:
the second one matches zero rows once the first has committed (or blocks
on the row lock and then re-checks the predicate). A booking is claimed
with the same kind of UPDATE before its credit is taken, so it is charged
at most once.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error, Result, Return
from src.app.services.session_credit_ledger import (
    ConsumeOutcome,
    RestoreOutcome,
    SessionCreditLedger,
)
from src.app.services.eligibility import categories_match
from src.domain.base import utcnow
from src.domain.entities import (
    Booking,
    ClassSession,
    Membership,
    MembershipPlan,
    MembershipStatus,
    PlanKind,
    StudioClass,
)

logger = logging.getLogger(__name__)


class SqlSessionCreditLedger(SessionCreditLedger):
    """Ledger bound to the unit of work's session (joins its transaction)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def consume(
        self, tenant_id: UUID, user_id: UUID, booking_id: UUID
    ) -> Result[ConsumeOutcome]:
        try:
            booking = await self._get_booking(booking_id)
            if (
                booking is None
                or booking.tenant_id != tenant_id
                or booking.user_id != user_id
            ):
                return Return.err(Error("booking_not_found", "Booking not found"))
            if booking.membership_id is not None:
                return Return.ok(
                    ConsumeOutcome(consumed=False, membership_id=booking.membership_id)
                )

            membership = await self._resolve_membership(booking)
            now = utcnow()
            if (
                membership is None
                or membership.status != MembershipStatus.active
                or not membership.is_within_window(now)
                or not await self._covers_class(membership, booking)
            ):
                return Return.err(
                    Error("no_active_membership", "No active membership to charge")
                )

            if membership.plan_kind != PlanKind.sessions:
                return Return.ok(
                    ConsumeOutcome(consumed=False, membership_id=membership.id)
                )

            # Claim the booking before touching the credit: a booking that
            # was charged meanwhile matches no row here.
            claim = (
                update(Booking)
                .where(Booking.id == booking_id, Booking.membership_id.is_(None))
                .values(membership_id=membership.id, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            claimed = await self.session.execute(claim)
            if claimed.rowcount != 1:
                await self.session.refresh(booking)
                return Return.ok(
                    ConsumeOutcome(consumed=False, membership_id=booking.membership_id)
                )

            decrement = (
                update(Membership)
                .where(
                    Membership.id == membership.id,
                    Membership.tenant_id == tenant_id,
                    Membership.status == MembershipStatus.active,
                    Membership.remaining_sessions > 0,
                    or_(Membership.starts_at.is_(None), Membership.starts_at <= now),
                    or_(Membership.ends_at.is_(None), Membership.ends_at >= now),
                )
                .values(remaining_sessions=Membership.remaining_sessions - 1)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(decrement)
            if result.rowcount != 1:
                # The caller rolls back, which also releases the claim
                return Return.err(
                    Error(
                        "no_credits_remaining",
                        "Membership has no remaining sessions",
                        {"membership_id": str(membership.id)},
                    )
                )

            await self.session.refresh(booking)
            await self.session.refresh(membership)
            remaining = membership.remaining_sessions
            logger.info(
                f"Consumed session credit: booking={booking_id} "
                f"membership={membership.id} remaining={remaining}"
            )
            return Return.ok(
                ConsumeOutcome(
                    consumed=True,
                    membership_id=membership.id,
                    remaining_sessions=remaining,
                )
            )
        except SQLAlchemyError as exc:
            logger.error(f"Ledger consume failed for booking {booking_id}: {exc}")
            return Return.err(Error("ledger_failure", "Could not consume session credit"))

    async def restore(self, booking_id: UUID) -> Result[RestoreOutcome]:
        try:
            booking = await self._get_booking(booking_id)
            if booking is None:
                return Return.err(Error("booking_not_found", "Booking not found"))
            membership_id = booking.membership_id

            # Delete first: only the transaction that actually removes the
            # row gives the credit back.
            removal = (
                delete(Booking)
                .where(Booking.id == booking_id)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(removal)
            if result.rowcount != 1:
                return Return.err(Error("booking_not_found", "Booking not found"))
            self.session.expunge(booking)

            restored = 0
            if membership_id is not None:
                increment = (
                    update(Membership)
                    .where(
                        Membership.id == membership_id,
                        Membership.plan_kind == PlanKind.sessions,
                    )
                    .values(
                        remaining_sessions=func.coalesce(Membership.remaining_sessions, 0) + 1
                    )
                    .execution_options(synchronize_session=False)
                )
                restored = (await self.session.execute(increment)).rowcount
            await self.session.flush()

            logger.info(
                f"Deleted booking {booking_id}, restored {restored} session credit(s)"
            )
            return Return.ok(
                RestoreOutcome(
                    booking_id=booking_id,
                    membership_id=membership_id,
                    restored_sessions=restored,
                )
            )
        except SQLAlchemyError as exc:
            logger.error(f"Ledger restore failed for booking {booking_id}: {exc}")
            return Return.err(Error("ledger_failure", "Could not restore session credit"))

    async def _get_booking(self, booking_id: UUID) -> Optional[Booking]:
        stmt = select(Booking).where(Booking.id == booking_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _resolve_membership(self, booking: Booking) -> Optional[Membership]:
        stmt = (
            select(Membership)
            .where(
                Membership.tenant_id == booking.tenant_id,
                Membership.user_id == booking.user_id,
                Membership.status == MembershipStatus.active,
            )
            .order_by(Membership.starts_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _covers_class(self, membership: Membership, booking: Booking) -> bool:
        session = await self.session.get(ClassSession, booking.session_id)
        studio_class = (
            await self.session.get(StudioClass, session.class_id) if session else None
        )
        if studio_class is None:
            return False
        plan = await self.session.get(MembershipPlan, membership.plan_id)
        return categories_match(plan, studio_class)


class DisabledSessionCreditLedger(SessionCreditLedger):
    """Used when no credit system is configured for the deployment"""

    async def consume(
        self, tenant_id: UUID, user_id: UUID, booking_id: UUID
    ) -> Result[ConsumeOutcome]:
        return Return.err(Error("ledger_unavailable", "Session credit ledger is not configured"))

    async def restore(self, booking_id: UUID) -> Result[RestoreOutcome]:
        return Return.err(Error("ledger_unavailable", "Session credit ledger is not configured"))
