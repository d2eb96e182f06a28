"""Contract repository interface.
Defines the contract persistence operations offered by the backend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from backoffice.domain.models.contract import Contract
from backoffice.domain.services.change_detection import ContractChangeSet


@dataclass(frozen=True)
class ContractFilter:
    """One server-side filter triple."""

    field: str
    operator: str = "eq"
    content: Optional[str] = None


@dataclass
class ContractQuery:
    page: int = 1
    per_page: int = 25
    search: Optional[str] = None
    search_in: List[str] = field(default_factory=list)
    filters: List[ContractFilter] = field(default_factory=list)
    order: Dict[str, str] = field(default_factory=dict)
    json_collections: List[str] = field(default_factory=list)


@dataclass
class ContractPage:
    data: List[Contract]
    page: int
    per_page: int
    total: int
    total_pages: int


class ContractRepository(ABC):
    """
    Repository interface for the Contract aggregate.
    """

    @abstractmethod
    async def create(self, contract: Contract) -> Contract:
        """
        Persist a new contract with all of its items.
        Returns the contract as stored by the backend.
        """
        pass

    @abstractmethod
    async def update(self, contract_id: int, changes: ContractChangeSet) -> Contract:
        """
        Send a partial or full update for an existing contract.
        """
        pass

    @abstractmethod
    async def remove(self, contract_id: int) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, contract_id: int) -> Optional[Contract]:
        """
        Find a contract by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def list(self, query: ContractQuery) -> ContractPage:
        """
        List one page of contracts matching the query.
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Contract]:
        pass
