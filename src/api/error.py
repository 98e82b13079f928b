from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Error code -> HTTP status for expected (client) failures.
# Anything not listed is a server error.
CLIENT_ERROR_STATUS = {
    "invalid_json": status.HTTP_400_BAD_REQUEST,
    "missing_fields": status.HTTP_400_BAD_REQUEST,
    "user_id_required_for_admin": status.HTTP_400_BAD_REQUEST,
    "invalid_status": status.HTTP_400_BAD_REQUEST,
    "invalid_booking_type": status.HTTP_400_BAD_REQUEST,
    "session_not_found": status.HTTP_400_BAD_REQUEST,
    "class_not_found": status.HTTP_400_BAD_REQUEST,
    "plan_not_found": status.HTTP_400_BAD_REQUEST,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "subscription_inactive": status.HTTP_402_PAYMENT_REQUIRED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "tenant_mismatch": status.HTTP_403_FORBIDDEN,
    "session_wrong_tenant": status.HTTP_403_FORBIDDEN,
    "class_wrong_tenant": status.HTTP_403_FORBIDDEN,
    "target_user_wrong_tenant": status.HTTP_403_FORBIDDEN,
    "plan_wrong_tenant": status.HTTP_403_FORBIDDEN,
    "booking_not_found": status.HTTP_404_NOT_FOUND,
    "tenant_not_found": status.HTTP_404_NOT_FOUND,
    "no_active_membership": status.HTTP_409_CONFLICT,
    "drop_in_not_allowed_for_class": status.HTTP_409_CONFLICT,
    "already_booked": status.HTTP_409_CONFLICT,
    "session_full": status.HTTP_409_CONFLICT,
    "outside_checkin_window": status.HTTP_409_CONFLICT,
    "cancel_deadline_passed": status.HTTP_409_CONFLICT,
    "no_credits_remaining": status.HTTP_409_CONFLICT,
    "invalid_status_transition": status.HTTP_409_CONFLICT,
    "booking_not_live": status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise the HTTP-facing exception for a use case error"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)
