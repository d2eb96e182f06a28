"""
Base DTOs for the application layer.
Wire shapes exchanged with the REST backend, keyed by its camelCase names.
"""

from typing import Any, Dict, List, TypeVar, Generic
from pydantic import BaseModel, Field, ConfigDict


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        # The backend adds fields freely; unknown keys are ignored on read
        extra="ignore",
    )


class ResponseDTO(BaseDTO):
    """Base class for DTOs parsed from backend responses."""
    pass


class PayloadDTO(BaseDTO):
    """Base class for request bodies sent to the backend."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        extra="forbid",
    )

    def to_payload(self) -> Dict[str, Any]:
        """
        Serialize with wire names.

        Only fields that were explicitly set are sent, so an explicit
        ``None`` reaches the backend as ``null`` while untouched fields
        are left out.
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


T = TypeVar('T')


class PageResponseDTO(ResponseDTO, Generic[T]):
    """Paginated list envelope used by the contract endpoints."""

    data: List[T] = Field(default_factory=list, description="Page items")
    page: int = Field(default=1, description="Current page number")
    per_page: int = Field(default=25, alias="perPage", description="Items per page")
    total: int = Field(default=0, description="Total number of items")
    total_pages: int = Field(default=0, alias="totalPages", description="Total number of pages")


def total_pages(total: int, page_size: int) -> int:
    """Ceiling division; zero page size counts as one page per record."""
    if page_size <= 0:
        return total
    return (total + page_size - 1) // page_size
