# users/services/exceptions.py

"""
USER SERVICE ERRORS
"""

from common.exceptions import ServiceError


class UserServiceError(ServiceError):
    """Base exception for account/registration failures."""


class AccountValidationError(UserServiceError):
    status_code = 400
    code = "validation_error"


class AccountExistsError(UserServiceError):
    """Raised when registering an email that already has an account."""

    status_code = 409
    code = "duplicate"


class InvalidCredentialsError(UserServiceError):
    """Raised on a failed login or a wrong current password."""

    status_code = 401
    code = "invalid_credentials"
