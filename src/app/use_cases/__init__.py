"""
Use Cases

Organized into domain folders:
- bookings/: Admission, check-in, lifecycle and the no-show sweep
- memberships/: Membership issuance

Import from subdirectories for better organization.
"""

from .bookings import (
    CheckInUseCase,
    CreateBookingUseCase,
    DeleteBookingUseCase,
    GetBookingUseCase,
    MarkNoShowsUseCase,
    PreviewEligibilityUseCase,
    UpdateBookingUseCase,
)
from .memberships import CreateMembershipUseCase

__all__ = [
    # Bookings
    "CreateBookingUseCase",
    "CheckInUseCase",
    "UpdateBookingUseCase",
    "DeleteBookingUseCase",
    "MarkNoShowsUseCase",
    "GetBookingUseCase",
    "PreviewEligibilityUseCase",
    # Memberships
    "CreateMembershipUseCase",
]
