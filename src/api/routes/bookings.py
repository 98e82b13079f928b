from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.bookings import (
    BookingEnvelope,
    CreateBookingUseCase,
    DeleteBookingResponse,
    DeleteBookingUseCase,
    GetBookingUseCase,
    UpdateBookingUseCase,
)
from src.depends import get_current_caller, get_unit_of_work

router = APIRouter(prefix="/bookings", tags=["Bookings"])


class CreateBookingRequest(BaseModel):
    """
    Create booking HTTP request payload

    Members book for themselves; admins must name the member in user_id.
    """

    tenant_id: UUID = Field(..., description="Tenant the session belongs to")
    session_id: UUID = Field(..., description="Class session to book")
    user_id: Optional[UUID] = Field(None, description="Member to book (admins only)")
    booking_type: Optional[str] = Field(None, description="membership or drop_in")


class UpdateBookingRequest(BaseModel):
    """Status change and/or move to another session"""

    status: Optional[str] = Field(None, description="cancelled or no_show")
    session_id: Optional[UUID] = Field(None, description="Destination session (admins only)")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BookingEnvelope)
async def create_booking(
    request: CreateBookingRequest,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Booking

    Admits a member into a class session, charging a session credit when
    the booking is paid from a sessions plan.

    Raises:
        - 400 Bad Request: user_id_required_for_admin, invalid_booking_type,
                           session_not_found, class_not_found
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: tenant_mismatch, session_wrong_tenant,
                         class_wrong_tenant, target_user_wrong_tenant
        - 409 Conflict: already_booked, session_full, no_active_membership,
                        drop_in_not_allowed_for_class, no_credits_remaining
        - 500 Internal Server Error: ledger_unavailable, ledger_failure
    """
    use_case = CreateBookingUseCase(uow)
    result = await use_case.execute(
        caller,
        tenant_id=request.tenant_id,
        session_id=request.session_id,
        user_id=request.user_id,
        booking_type=request.booking_type,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{booking_id}", status_code=status.HTTP_200_OK, response_model=BookingEnvelope)
async def get_booking(
    booking_id: UUID,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Booking

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: tenant_mismatch
        - 404 Not Found: booking_not_found
    """
    use_case = GetBookingUseCase(uow)
    result = await use_case.execute(caller, booking_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{booking_id}", status_code=status.HTTP_200_OK, response_model=BookingEnvelope)
async def update_booking(
    booking_id: UUID,
    request: UpdateBookingRequest,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Booking

    Cancels a booking, marks it as no-show, or moves it to another session.
    Cancelling never gives the session credit back.

    Raises:
        - 400 Bad Request: missing_fields, invalid_status, session_not_found
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: forbidden, tenant_mismatch, session_wrong_tenant
        - 404 Not Found: booking_not_found
        - 409 Conflict: cancel_deadline_passed, invalid_status_transition,
                        booking_not_live, session_full, already_booked
    """
    use_case = UpdateBookingUseCase(
        uow,
        cancel_cutoff=timedelta(minutes=ApplicationConfig.CANCEL_CUTOFF_MINUTES),
    )
    result = await use_case.execute(
        caller,
        booking_id,
        status=request.status,
        session_id=request.session_id,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{booking_id}", status_code=status.HTTP_200_OK, response_model=DeleteBookingResponse
)
async def delete_booking(
    booking_id: UUID,
    caller: CallerContext = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Booking

    Removes the booking and restores its session credit, if one was consumed.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 402 Payment Required: subscription_inactive
        - 403 Forbidden: forbidden, tenant_mismatch
        - 404 Not Found: booking_not_found
        - 500 Internal Server Error: ledger_unavailable, ledger_failure
    """
    use_case = DeleteBookingUseCase(uow)
    result = await use_case.execute(caller, booking_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
