"""
Movement use cases.
Ledger listing, settlement with an optional payment proof, proof download
and month generation.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from backoffice.application.dto.base_dto import total_pages
from backoffice.application.notifications import Notifier
from backoffice.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from backoffice.domain.models.base import BusinessRuleViolation, DomainException, ValidationError
from backoffice.domain.models.movement import (
    Movement,
    MovementKind,
    MovementTotals,
    ProofFile,
    proof_file_name_from_url,
    proof_identifier_from_url,
)
from backoffice.domain.repositories.movement_repository import MovementRepository
from backoffice.domain.services.ordering import MovementFilters, MovementOrder, MovementOrderingPolicy


logger = logging.getLogger(__name__)


@dataclass
class ListMovementsRequest:
    kind: MovementKind
    filters: MovementFilters = field(default_factory=MovementFilters)
    page: int = 1
    limit: Optional[int] = None

    def validate(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be positive", "page")
        if self.limit is not None and self.limit < 1:
            raise ValidationError("Limit must be positive", "limit")


@dataclass
class MovementListing:
    movements: List[Movement]
    totals: MovementTotals
    order: MovementOrder
    page: int
    limit: int
    total_pages: int


class ListMovementsUseCase(QueryUseCase[ListMovementsRequest, MovementListing]):
    """Lists receivables or payables sorted by the most relevant date column."""

    failure_message = "Could not load movements"

    def __init__(self, repository: MovementRepository, notifier: Optional[Notifier] = None,
                 policy: Optional[MovementOrderingPolicy] = None, default_limit: int = 15):
        super().__init__(notifier)
        self.repository = repository
        self.policy = policy or MovementOrderingPolicy()
        self.default_limit = default_limit

    async def _execute_business_logic(self, request: ListMovementsRequest) -> MovementListing:
        limit = request.limit or self.default_limit
        order = self.policy.order_for(request.filters)
        page = await self.repository.list(
            MovementKind(request.kind), request.filters, order, request.page, limit
        )
        return MovementListing(
            movements=page.data,
            totals=page.totals,
            order=order,
            page=request.page,
            limit=limit,
            total_pages=total_pages(page.totals.total_records, limit),
        )


class ListMovementStatusesUseCase(QueryUseCase[MovementKind, List[str]]):
    failure_message = "Could not load status options"

    def __init__(self, repository: MovementRepository, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository

    async def _execute_business_logic(self, kind: MovementKind) -> List[str]:
        return await self.repository.list_statuses(MovementKind(kind))


class ProofUploadFailed(DomainException):
    """The payment update went through but the proof upload did not."""

    def __init__(self, movement: Movement, cause: Exception):
        super().__init__(
            f"Payment of movement {movement.id} was saved but the proof upload failed: {cause}",
            "PROOF_UPLOAD_FAILED"
        )
        self.movement = movement
        self.cause = cause


@dataclass
class SettleMovementRequest:
    movement: Movement
    settled: bool = True
    payment_date: Optional[date] = None
    effective_amount: Optional[Decimal] = None
    proof: Optional[ProofFile] = None

    def validate(self) -> None:
        if self.movement.id is None:
            raise ValidationError("Movement ID is required", "movement_id")
        if self.movement.settled and not self.settled:
            self.movement.unsettle()
        if self.settled and self.payment_date is None:
            raise ValidationError("Payment date is required", "payment_date")
        if self.effective_amount is not None and self.effective_amount < 0:
            raise ValidationError("Effective amount cannot be negative", "effective_amount")


class SettleMovementUseCase(CommandUseCase[SettleMovementRequest, Movement]):
    """
    Updates the payment state, then uploads the proof when one is attached.

    The two calls are independent: when the upload fails the payment update
    stays persisted and ``ProofUploadFailed`` carries the updated movement.
    """

    failure_message = "Could not update the payment"
    success_message = "Payment updated"

    def __init__(self, repository: MovementRepository, proof_validator,
                 notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository
        self.proof_validator = proof_validator

    async def _validate_request(self, request: SettleMovementRequest) -> None:
        await super()._validate_request(request)
        # Proof constraints are checked before any network call
        if request.proof is not None:
            self.proof_validator.validate(request.proof)

    async def _execute_command_logic(self, request: SettleMovementRequest) -> Movement:
        effective = request.effective_amount
        if request.settled and effective is None:
            effective = request.movement.face_amount

        updated = await self.repository.settle(
            request.movement.id,
            request.settled,
            request.payment_date if request.settled else None,
            effective if request.settled else Decimal("0"),
        )

        if request.proof is not None:
            try:
                proof_url = await self.repository.attach_proof(updated.id, request.proof)
            except DomainException as exc:
                raise ProofUploadFailed(updated, exc) from exc
            updated.attach_proof(proof_url)

        self._publish_events(updated)
        return updated

    def _failure_metadata(self, exc: Exception) -> Dict[str, Any]:
        if isinstance(exc, ProofUploadFailed):
            return {"payment_updated": True, "movement": exc.movement}
        return {}

    def _notify_failure(self, exc: Exception) -> None:
        if self.notifier and isinstance(exc, ProofUploadFailed):
            self.notifier.error("Payment updated, but the proof could not be uploaded")
            return
        super()._notify_failure(exc)


@dataclass
class ProofDownload:
    file_name: str
    content: bytes


class DownloadProofUseCase(QueryUseCase[str, ProofDownload]):
    """Takes a proof URL; the identifier is its last path segment without the extension."""

    failure_message = "Could not download the proof"

    def __init__(self, repository: MovementRepository, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository

    async def _validate_request(self, proof_url: str) -> None:
        if not proof_url:
            raise ValidationError("This movement has no proof attached", "proof_url")

    async def _execute_business_logic(self, proof_url: str) -> ProofDownload:
        identifier = proof_identifier_from_url(proof_url)
        content = await self.repository.download_proof(identifier)
        return ProofDownload(file_name=proof_file_name_from_url(proof_url), content=content)


@dataclass
class GenerateMovementsRequest:
    entity_id: int
    month: int
    year: int
    replace_existing: bool = False

    def validate(self) -> None:
        if not self.entity_id:
            raise ValidationError("Entity is required", "entity_id")
        if not 1 <= self.month <= 12:
            raise ValidationError("Month must be between 1 and 12", "month")
        if self.year < 2000:
            raise ValidationError("Invalid year", "year")


class GenerateMovementsUseCase(CommandUseCase[GenerateMovementsRequest, Dict[str, Any]]):
    """Asks the backend to generate a month; an existing month needs ``replace_existing``."""

    failure_message = "Could not generate movements"
    success_message = "Movements generated"

    def __init__(self, repository: MovementRepository, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository

    async def _execute_command_logic(self, request: GenerateMovementsRequest) -> Dict[str, Any]:
        exists = await self.repository.exists(request.entity_id, request.month, request.year)
        if exists and not request.replace_existing:
            raise BusinessRuleViolation(
                f"Movements for {request.month:02d}/{request.year} already exist"
            )
        if exists:
            logger.warning(
                f"Regenerating movements for entity {request.entity_id} "
                f"({request.month:02d}/{request.year})"
            )
        return await self.repository.generate(request.entity_id, request.month, request.year)
