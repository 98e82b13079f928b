"""
Booking Use Cases

Admission, check-in and the lifecycle of a booking.
"""

from .check_in_use_case import CheckInUseCase
from .create_booking_use_case import CreateBookingUseCase
from .delete_booking_use_case import DeleteBookingUseCase
from .dtos import (
    BookingEnvelope,
    BookingResponse,
    DeleteBookingResponse,
    EligibilityResponse,
    NoShowSweepResponse,
)
from .get_booking_use_case import GetBookingUseCase
from .mark_no_shows_use_case import MarkNoShowsUseCase
from .preview_eligibility_use_case import PreviewEligibilityUseCase
from .update_booking_use_case import UpdateBookingUseCase

__all__ = [
    "CreateBookingUseCase",
    "CheckInUseCase",
    "UpdateBookingUseCase",
    "DeleteBookingUseCase",
    "MarkNoShowsUseCase",
    "GetBookingUseCase",
    "PreviewEligibilityUseCase",
    "BookingEnvelope",
    "BookingResponse",
    "DeleteBookingResponse",
    "EligibilityResponse",
    "NoShowSweepResponse",
]
