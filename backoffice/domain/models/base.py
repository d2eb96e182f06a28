"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from typing import Optional, Any, Dict
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import uuid


class DomainEvent(ABC):
    """Base class for domain events."""

    def __init__(self):
        self.occurred_at = datetime.now()
        self.event_id = str(uuid.uuid4())

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Return the name of the event."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in self.__dict__.items() if k not in ("occurred_at", "event_id")}
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "occurred_at": self.occurred_at.isoformat(),
            "data": data
        }


@dataclass(eq=False)
class BaseEntity(ABC):
    """
    Base class for all domain entities.

    ``id`` is the backend identifier; it stays ``None`` until the record
    has been persisted by the REST backend.
    """

    id: Optional[int] = None

    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def add_event(self, event: DomainEvent) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> list[DomainEvent]:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None


@dataclass(eq=False)
class AggregateRoot(BaseEntity):
    """Entry point to an aggregate; owns its children and raises domain events."""


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass
