"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic
from dataclasses import dataclass
from datetime import datetime

from backoffice.application.notifications import Notifier
from backoffice.domain.models.base import BaseEntity, DomainException, ValidationError, BusinessRuleViolation


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

GENERIC_FAILURE_MESSAGE = "The operation could not be completed. Please try again."


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, ValidationError):
            return cls.error_result(exc.message, "VALIDATION_ERROR")
        elif isinstance(exc, BusinessRuleViolation):
            return cls.error_result(exc.message, "BUSINESS_RULE_VIOLATION")
        elif isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        else:
            return cls.error_result(str(exc), "UNKNOWN_ERROR")


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.

    Failures are terminal: the exception is logged, turned into an error
    result and, when a notifier is attached, surfaced to the user.
    Validation and business-rule messages are shown as is; anything else
    gets ``failure_message``.
    """

    failure_message = GENERIC_FAILURE_MESSAGE
    success_message: Optional[str] = None

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = datetime.now()

        try:
            await self._validate_request(request)
            result = await self._execute_business_logic(request)

            self.execution_end = datetime.now()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            if self.notifier and self.success_message:
                self.notifier.success(self.success_message)

            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": execution_time,
                    "executed_at": self.execution_end.isoformat()
                }
            )

        except Exception as exc:
            self.execution_end = datetime.now()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            self._log_failure(exc)
            self._notify_failure(exc)

            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__,
                **self._failure_metadata(exc)
            }

            return error_result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'validate'):
            request.validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass

    def _publish_events(self, aggregate: BaseEntity) -> None:
        """Drain the aggregate's domain events into the application log."""
        for event in aggregate.pull_events():
            payload = event.to_dict()
            logger.info(f"{payload['event_name']} {payload['event_id']}: {payload['data']}")

    def _failure_metadata(self, exc: Exception) -> Dict[str, Any]:
        return {}

    def _log_failure(self, exc: Exception) -> None:
        name = self.__class__.__name__
        if isinstance(exc, (ValidationError, BusinessRuleViolation)):
            logger.info(f"{name} rejected: {exc}")
        elif isinstance(exc, DomainException):
            logger.error(f"{name} failed: {exc.code}: {exc.message}")
        else:
            logger.error(f"{name} failed unexpectedly: {str(exc)}", exc_info=True)

    def _notify_failure(self, exc: Exception) -> None:
        if not self.notifier:
            return
        if isinstance(exc, (ValidationError, BusinessRuleViolation)):
            self.notifier.error(exc.message)
        else:
            self.notifier.error(self.failure_message)


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).

    Holds a re-entrancy guard: while one execution is in flight a second
    call is rejected instead of issuing a concurrent mutating request.
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.in_flight = False

    async def _execute_business_logic(self, request: T) -> R:
        if self.in_flight:
            raise BusinessRuleViolation("A save is already in progress")
        self.in_flight = True
        try:
            return await self._execute_command_logic(request)
        finally:
            self.in_flight = False

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass
