"""
Admin API Routes - Scheduled Jobs

These endpoints are called by the scheduler, not by studio staff.
Authentication is via Admin API Key, not user JWTs.
"""

from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.bookings import MarkNoShowsUseCase, NoShowSweepResponse
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/tenants/{tenant_id}/bookings/no-show-sweep",
    status_code=status.HTTP_200_OK,
    response_model=NoShowSweepResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def no_show_sweep(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    No-show Sweep

    Marks bookings that were never checked in as no_show once their
    session's check-in window has closed. No credit is restored.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: tenant_not_found
        - 500 Internal Server Error: Server error
    """
    use_case = MarkNoShowsUseCase(
        uow,
        closes_after=timedelta(minutes=ApplicationConfig.CHECKIN_CLOSES_AFTER_MINUTES),
        fallback=timedelta(minutes=ApplicationConfig.CHECKIN_FALLBACK_MINUTES),
    )
    result = await use_case.execute(tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
