"""Movement repository interface.
Query and settlement operations for receivable and payable movements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from backoffice.domain.models.movement import Movement, MovementKind, MovementTotals, ProofFile
from backoffice.domain.services.ordering import MovementFilters, MovementOrder


@dataclass
class MovementPage:
    data: List[Movement]
    totals: MovementTotals = field(default_factory=MovementTotals)


class MovementRepository(ABC):
    """
    Repository interface for movements.
    Movements are produced by the backend; the console lists and settles them.
    """

    @abstractmethod
    async def list(
        self,
        kind: MovementKind,
        filters: MovementFilters,
        order: MovementOrder,
        page: int = 1,
        limit: int = 15
    ) -> MovementPage:
        """
        List receivables or payables with their aggregate totals.
        """
        pass

    @abstractmethod
    async def list_statuses(self, kind: MovementKind) -> List[str]:
        """
        Status labels offered by the ledger filter.
        """
        pass

    @abstractmethod
    async def settle(
        self,
        movement_id: int,
        settled: bool,
        payment_date: Optional[date] = None,
        effective_amount: Optional[Decimal] = None
    ) -> Movement:
        """
        Update the settlement state of a movement.
        """
        pass

    @abstractmethod
    async def attach_proof(self, movement_id: int, proof: ProofFile) -> str:
        """
        Upload a payment proof; returns the stored proof URL.
        """
        pass

    @abstractmethod
    async def download_proof(self, identifier: str) -> bytes:
        pass

    @abstractmethod
    async def exists(self, entity_id: int, month: int, year: int) -> bool:
        """
        Whether movements were already generated for the entity and month.
        """
        pass

    @abstractmethod
    async def generate(self, entity_id: int, month: int, year: int) -> dict:
        pass
