"""
Mark No-Shows Use Case

Scheduled sweep: bookings still in booked status after their session's
check-in window has closed become no_show.
"""

import logging
from datetime import timedelta
from typing import Callable
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import NoShowSweepResponse

logger = logging.getLogger(__name__)


class MarkNoShowsUseCase:
    """
    Use case for the no-show sweep of one tenant.

    Business Rules:
    - A session is closed once ends_at + closes_after has passed, or
      starts_at + fallback when it has no end time
    - Only booked bookings change; checked_in/cancelled are left alone
    - No credit is restored for a no-show
    """

    def __init__(
        self,
        uow: UnitOfWork,
        closes_after: timedelta = timedelta(minutes=30),
        fallback: timedelta = timedelta(minutes=120),
        clock: Callable = utcnow,
    ):
        self.uow = uow
        self.closes_after = closes_after
        self.fallback = fallback
        self.clock = clock

    async def execute(self, tenant_id: UUID) -> Result[NoShowSweepResponse]:
        now = self.clock()

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("tenant_not_found", "Tenant not found"))

            session_ids = await self.uow.class_sessions.get_ids_with_closed_checkin(
                tenant_id,
                ended_before=now - self.closes_after,
                started_before=now - self.fallback,
            )
            marked = await self.uow.bookings.mark_no_show(tenant_id, session_ids)
            await self.uow.commit()

        logger.info(
            f"No-show sweep for tenant {tenant_id}: "
            f"{len(session_ids)} closed sessions, {marked} bookings marked"
        )
        return Return.ok(
            NoShowSweepResponse(sessions_closed=len(session_ids), bookings_marked=marked)
        )
