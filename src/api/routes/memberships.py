from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.memberships import CreateMembershipUseCase, MembershipResponse
from src.depends import get_current_caller, get_unit_of_work

router = APIRouter(prefix="/memberships", tags=["Memberships"])


class CreateMembershipRequest(BaseModel):
    tenant_id: UUID
    user_id: UUID
    plan_id: UUID
    starts_at: Optional[datetime] = Field(None, description="Defaults to now (UTC)")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MembershipResponse)
async def create_membership(
    request: CreateMembershipRequest,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Issue Membership

    Raises:
        - 400 Bad Request: plan_not_found
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: forbidden, tenant_mismatch, plan_wrong_tenant,
                         target_user_wrong_tenant
    """
    starts_at = request.starts_at
    if starts_at is not None and starts_at.tzinfo is not None:
        starts_at = starts_at.astimezone(UTC).replace(tzinfo=None)

    use_case = CreateMembershipUseCase(uow)
    result = await use_case.execute(
        caller,
        tenant_id=request.tenant_id,
        user_id=request.user_id,
        plan_id=request.plan_id,
        starts_at=starts_at,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
