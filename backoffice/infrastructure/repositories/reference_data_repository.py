"""
Reference data over the REST backend: contract types, bank accounts and
role holders.
"""

from typing import Any, List, Optional

from backoffice.application.dto.contract_dto import BankAccountDTO, ContractTypeDTO, RoleHolderDTO
from backoffice.domain.models.value_objects import BankAccount, ContractType, RoleHolder, RoleKind
from backoffice.domain.repositories.reference_data_repository import (
    ReferenceDataRepository as ReferenceDataRepositoryInterface,
)
from backoffice.infrastructure.http.api_client import ApiClient
from backoffice.infrastructure.mappers.contract_mapper import ContractMapper


ROLE_PATHS = {
    RoleKind.CLIENT: "/cliente",
    RoleKind.PARTNER: "/parceiro",
    RoleKind.SHAREHOLDER: "/socios",
}


def _rows(body: Any) -> List[dict]:
    """List endpoints answer either ``{"data": [...]}`` or a bare list."""
    if isinstance(body, dict):
        return body.get("data") or []
    return body or []


class HttpReferenceDataRepository(ReferenceDataRepositoryInterface):
    """Read-only catalogues backing the editor selectors."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.mapper = ContractMapper()

    async def list_contract_types(self) -> List[ContractType]:
        body = await self.client.get("/contrato-tipo")
        return [self.mapper.type_to_domain(ContractTypeDTO.model_validate(row)) for row in _rows(body)]

    async def list_bank_accounts(self, entity_id: int) -> List[BankAccount]:
        body = await self.client.get(f"/entidade-conta-bancaria/entidade/{entity_id}")
        return [
            self.mapper.bank_account_to_domain(BankAccountDTO.model_validate(row), entity_id)
            for row in _rows(body)
        ]

    async def search_role_holders(self, kind: RoleKind, term: Optional[str] = None) -> List[RoleHolder]:
        """
        Fetch the role holders of one kind and filter them locally by name
        or document.
        """
        kind = RoleKind(kind)
        body = await self.client.get(ROLE_PATHS[kind])
        holders = [
            self.mapper.role_holder_to_domain(kind, RoleHolderDTO.model_validate(row))
            for row in _rows(body)
        ]
        holders = [holder for holder in holders if holder is not None]
        if not term:
            return holders
        needle = term.strip().lower()
        return [
            holder for holder in holders
            if needle in holder.name.lower() or needle in (holder.document or "").lower()
        ]
