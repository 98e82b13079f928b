from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.bookings import BookingEnvelope, CheckInUseCase
from src.depends import get_current_caller, get_unit_of_work

router = APIRouter(prefix="/checkins", tags=["Check-in"])


class CheckInRequest(BaseModel):
    session_id: UUID = Field(..., description="Session being attended")
    user_id: UUID = Field(..., description="Member checking in")


@router.post("", status_code=status.HTTP_200_OK, response_model=BookingEnvelope)
async def check_in(
    request: CheckInRequest,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check In

    Marks the member as attended, creating a walk-in booking if needed.

    Raises:
        - 400 Bad Request: session_not_found
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: forbidden, session_wrong_tenant, target_user_wrong_tenant
        - 409 Conflict: outside_checkin_window, session_full,
                        no_active_membership, no_credits_remaining
        - 500 Internal Server Error: ledger_failure
    """
    use_case = CheckInUseCase(
        uow,
        opens_before=timedelta(minutes=ApplicationConfig.CHECKIN_OPENS_BEFORE_MINUTES),
        closes_after=timedelta(minutes=ApplicationConfig.CHECKIN_CLOSES_AFTER_MINUTES),
        fallback=timedelta(minutes=ApplicationConfig.CHECKIN_FALLBACK_MINUTES),
    )
    result = await use_case.execute(caller, request.session_id, request.user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
