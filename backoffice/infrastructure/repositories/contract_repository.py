"""
Contract repository implementation over the REST backend.
"""

import logging
from typing import Any, Dict, List, Optional

from backoffice.application.dto.contract_dto import ContractPageDTO, ContractResponseDTO
from backoffice.domain.models.contract import Contract
from backoffice.domain.repositories.contract_repository import (
    ContractPage,
    ContractQuery,
    ContractRepository as ContractRepositoryInterface,
)
from backoffice.domain.services.change_detection import ContractChangeDetector, ContractChangeSet
from backoffice.infrastructure.http.api_client import ApiClient
from backoffice.infrastructure.http.errors import NotFoundError
from backoffice.infrastructure.mappers.contract_mapper import ContractMapper


logger = logging.getLogger(__name__)

MAX_PER_PAGE = 200
MIN_SEARCH_LENGTH = 2


def build_contract_query_params(
    query: ContractQuery,
    max_per_page: int = MAX_PER_PAGE,
    min_search_length: int = MIN_SEARCH_LENGTH
) -> Dict[str, Any]:
    """
    Flatten a contract query into the backend's query-string shape.

    ``perPage`` is capped, the search term is only sent from
    ``min_search_length`` characters on, and filters become indexed
    ``filters[i][...]`` keys.
    """
    params: Dict[str, Any] = {}
    if query.page:
        params["page"] = query.page
    if query.per_page:
        params["perPage"] = min(query.per_page, max_per_page)

    if query.search and len(query.search) >= min_search_length:
        params["search"] = query.search
        if query.search_in:
            params["searchIn"] = ",".join(query.search_in)

    for index, item in enumerate(query.filters):
        params[f"filters[{index}][field]"] = item.field
        params[f"filters[{index}][operator]"] = item.operator
        if item.content:
            params[f"filters[{index}][content]"] = item.content

    for field_name, direction in query.order.items():
        params[f"order[{field_name}]"] = direction

    if query.json_collections:
        params["jsonCollections"] = ",".join(query.json_collections)
    return params


class HttpContractRepository(ContractRepositoryInterface):
    """REST implementation of the contract repository."""

    base_path = "/contrato"

    def __init__(self, client: ApiClient, max_per_page: int = MAX_PER_PAGE,
                 min_search_length: int = MIN_SEARCH_LENGTH):
        self.client = client
        self.mapper = ContractMapper()
        self.detector = ContractChangeDetector()
        self.max_per_page = max_per_page
        self.min_search_length = min_search_length

    async def create(self, contract: Contract) -> Contract:
        """POST the full contract with every item."""
        payload = self.mapper.change_set_to_payload(self.detector.full(contract)).to_payload()
        body = await self.client.post(self.base_path, json=payload)
        saved = self._unwrap(body)
        logger.info(f"Contract created: {saved.id}")
        return saved

    async def update(self, contract_id: int, changes: ContractChangeSet) -> Contract:
        """PATCH only the changed fields (and the item list when present)."""
        payload = self.mapper.change_set_to_payload(changes).to_payload()
        body = await self.client.patch(f"{self.base_path}/{contract_id}", json=payload)
        saved = self._unwrap(body)
        logger.info(f"Contract {contract_id} updated: {changes.changed_field_names()}")
        return saved

    async def remove(self, contract_id: int) -> None:
        await self.client.delete(f"{self.base_path}/{contract_id}")
        logger.info(f"Contract removed: {contract_id}")

    async def find_by_id(self, contract_id: int) -> Optional[Contract]:
        try:
            body = await self.client.get(f"{self.base_path}/{contract_id}")
        except NotFoundError:
            return None
        return self._unwrap(body)

    async def list(self, query: ContractQuery) -> ContractPage:
        params = build_contract_query_params(query, self.max_per_page, self.min_search_length)
        body = await self.client.get(self.base_path, params=params)
        page = ContractPageDTO.model_validate(body or {})
        return ContractPage(
            data=[self.mapper.response_to_domain(dto) for dto in page.data],
            page=page.page,
            per_page=page.per_page,
            total=page.total,
            total_pages=page.total_pages,
        )

    async def list_all(self) -> List[Contract]:
        body = await self.client.get(f"{self.base_path}/list-all")
        rows = body.get("data", []) if isinstance(body, dict) else (body or [])
        return [self.mapper.response_to_domain(ContractResponseDTO.model_validate(row)) for row in rows]

    def _unwrap(self, body: Any) -> Contract:
        """Responses come either bare or wrapped as ``{"contrato": {...}}``."""
        if isinstance(body, dict) and isinstance(body.get("contrato"), dict):
            body = body["contrato"]
        return self.mapper.response_to_domain(ContractResponseDTO.model_validate(body or {}))
