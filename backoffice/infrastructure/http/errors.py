"""
Transport errors raised by the API client.
"""

from typing import Any, Optional

from backoffice.domain.models.base import DomainException


class ApiError(DomainException):
    """Non-2xx response or transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 payload: Optional[Any] = None, code: str = "API_ERROR"):
        super().__init__(message, code)
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(ApiError):
    """HTTP 401. Raised after the session has already been cleared."""

    def __init__(self, message: str = "Session expired", payload: Optional[Any] = None):
        super().__init__(message, 401, payload, code="UNAUTHORIZED")


class NotFoundError(ApiError):
    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message, 404, payload, code="NOT_FOUND")
