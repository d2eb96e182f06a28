"""Reference data interface.
Read-only catalogues used to populate the contract editor selectors.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from backoffice.domain.models.value_objects import BankAccount, ContractType, RoleHolder, RoleKind


class ReferenceDataRepository(ABC):

    @abstractmethod
    async def list_contract_types(self) -> List[ContractType]:
        pass

    async def find_contract_type(self, contract_type_id: int) -> Optional[ContractType]:
        """Look a contract type up in the catalogue."""
        for contract_type in await self.list_contract_types():
            if contract_type.id == contract_type_id:
                return contract_type
        return None

    @abstractmethod
    async def list_bank_accounts(self, entity_id: int) -> List[BankAccount]:
        """
        Bank accounts owned by an entity.
        """
        pass

    @abstractmethod
    async def search_role_holders(self, kind: RoleKind, term: Optional[str] = None) -> List[RoleHolder]:
        """
        Clients, partners or shareholders matching ``term``.
        """
        pass
