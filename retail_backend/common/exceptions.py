# common/exceptions.py

"""
SERVICE ERRORS (SHARED BASE)

Every domain service raises subclasses of ServiceError. The class carries
what the HTTP layer needs to answer without knowing the domain:

- status_code: HTTP status to answer with
- code:        stable machine-readable category
- retryable:   True when the same request may succeed later unchanged
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all domain service failures."""

    status_code = 500
    code = "service_error"
    retryable = False

    def __init__(self, message: str = "", *, details=None):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details = details

    def __str__(self) -> str:
        return self.message
