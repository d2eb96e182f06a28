"""
HTTP transport for the REST backend.
"""

from .errors import ApiError, UnauthorizedError, NotFoundError
from .api_client import ApiClient

__all__ = ["ApiClient", "ApiError", "UnauthorizedError", "NotFoundError"]
