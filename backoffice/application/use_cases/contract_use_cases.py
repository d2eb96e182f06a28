"""
Contract use cases.
Save (create or partial update), delete, fetch and list contracts.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from backoffice.application.notifications import Notifier
from backoffice.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from backoffice.domain.models.base import EntityNotFoundError, ValidationError
from backoffice.domain.models.contract import Contract
from backoffice.domain.models.value_objects import RoleKind
from backoffice.domain.repositories.contract_repository import (
    ContractFilter,
    ContractPage,
    ContractQuery,
    ContractRepository,
)
from backoffice.domain.services.change_detection import ContractChangeDetector


logger = logging.getLogger(__name__)


@dataclass
class SaveContractRequest:
    """
    ``original`` is the contract as loaded from the backend; None for a
    contract that was never persisted.
    """

    contract: Contract
    original: Optional[Contract] = None
    role_kind: Optional[RoleKind] = None

    def validate(self) -> None:
        self.contract.validate_for_submission(self.role_kind)


class SaveContractUseCase(CommandUseCase[SaveContractRequest, Contract]):
    """
    New contracts are sent in full; existing ones only carry the fields the
    change detector found, plus the item list.
    """

    failure_message = "Could not save the contract"

    def __init__(self, repository: ContractRepository, notifier: Optional[Notifier] = None,
                 detector: Optional[ContractChangeDetector] = None):
        super().__init__(notifier)
        self.repository = repository
        self.detector = detector or ContractChangeDetector()

    async def _execute_command_logic(self, request: SaveContractRequest) -> Contract:
        contract = request.contract
        if contract.is_new:
            saved = await self.repository.create(contract)
            self._announce("Contract created")
        else:
            changes = self.detector.detect(request.original, contract)
            if changes.is_empty:
                logger.info(f"Contract {contract.id} has no changes to send")
                saved = contract
            else:
                saved = await self.repository.update(contract.id, changes)
                self._announce("Contract updated")
        self._publish_events(contract)
        return saved

    def _announce(self, message: str) -> None:
        if self.notifier:
            self.notifier.success(message)


class DeleteContractUseCase(CommandUseCase[int, None]):
    failure_message = "Could not remove the contract"
    success_message = "Contract removed"

    def __init__(self, repository: ContractRepository, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository

    async def _validate_request(self, contract_id: int) -> None:
        if not contract_id or contract_id <= 0:
            raise ValidationError("Contract ID must be positive", "contract_id")

    async def _execute_command_logic(self, contract_id: int) -> None:
        await self.repository.remove(contract_id)


class GetContractUseCase(QueryUseCase[int, Contract]):
    failure_message = "Could not load the contract"

    def __init__(self, repository: ContractRepository, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.repository = repository

    async def _execute_business_logic(self, contract_id: int) -> Contract:
        contract = await self.repository.find_by_id(contract_id)
        if contract is None:
            raise EntityNotFoundError("Contract", contract_id)
        return contract


class ContractStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class ListContractsRequest:
    page: int = 1
    per_page: Optional[int] = None
    search: Optional[str] = None
    search_in: List[str] = field(default_factory=list)
    filters: List[ContractFilter] = field(default_factory=list)
    order_by: Optional[str] = None
    order_direction: str = "DESC"

    def validate(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be positive", "page")
        if self.per_page is not None and self.per_page < 1:
            raise ValidationError("Page size must be positive", "per_page")
        if self.order_direction not in ("ASC", "DESC"):
            raise ValidationError("Order direction must be ASC or DESC", "order_direction")

    def to_query(self, max_per_page: int, default_per_page: int = 25) -> ContractQuery:
        return ContractQuery(
            page=self.page,
            per_page=min(self.per_page or default_per_page, max_per_page),
            search=self.search,
            search_in=list(self.search_in),
            filters=list(self.filters),
            order={self.order_by: self.order_direction} if self.order_by else {},
        )


class ListContractsUseCase(QueryUseCase[ListContractsRequest, ContractPage]):
    failure_message = "Could not load contracts"

    def __init__(self, repository: ContractRepository, notifier: Optional[Notifier] = None,
                 max_per_page: int = 200, default_per_page: int = 25):
        super().__init__(notifier)
        self.repository = repository
        self.max_per_page = max_per_page
        self.default_per_page = default_per_page

    async def _execute_business_logic(self, request: ListContractsRequest) -> ContractPage:
        return await self.repository.list(request.to_query(self.max_per_page, self.default_per_page))


def filter_contracts(
    contracts: List[Contract],
    term: Optional[str] = None,
    status: ContractStatusFilter = ContractStatusFilter.ALL,
    min_length: int = 2
) -> List[Contract]:
    """
    Refine an already loaded page.

    The term (from ``min_length`` characters, case-insensitive) matches the
    contract number, description or billed party name.
    """
    status = ContractStatusFilter(status)
    result = contracts
    if status is ContractStatusFilter.ACTIVE:
        result = [c for c in result if c.active]
    elif status is ContractStatusFilter.INACTIVE:
        result = [c for c in result if not c.active]

    needle = (term or "").strip().lower()
    if len(needle) < min_length:
        return list(result)

    def matches(contract: Contract) -> bool:
        haystack = (
            contract.contract_number or "",
            contract.description or "",
            (contract.billed_party.name or "") if contract.billed_party else "",
        )
        return any(needle in value.lower() for value in haystack)

    return [c for c in result if matches(c)]
