from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.bookings import EligibilityResponse, PreviewEligibilityUseCase
from src.depends import get_current_caller, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get(
    "/{session_id}/eligibility",
    status_code=status.HTTP_200_OK,
    response_model=EligibilityResponse,
)
async def preview_eligibility(
    session_id: UUID,
    user_id: Optional[UUID] = Query(None, description="Member to check (admins only)"),
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Preview Eligibility

    Shows whether a booking would use a membership, be a drop-in, or be
    refused, without creating anything.
    """
    use_case = PreviewEligibilityUseCase(uow)
    result = await use_case.execute(caller, session_id, user_id=user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
