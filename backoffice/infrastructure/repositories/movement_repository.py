"""
Movement repository implementation over the REST backend.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from backoffice.application.dto.movement_dto import (
    MovementDTO,
    MovementGenerationPayloadDTO,
    MovementListResponseDTO,
    MovementStatusListDTO,
    ProofUploadResponseDTO,
)
from backoffice.domain.models.movement import Movement, MovementKind, ProofFile
from backoffice.domain.repositories.movement_repository import (
    MovementPage,
    MovementRepository as MovementRepositoryInterface,
)
from backoffice.domain.services.ordering import MovementFilters, MovementOrder
from backoffice.infrastructure.http.api_client import ApiClient
from backoffice.infrastructure.mappers.movement_mapper import MovementMapper


logger = logging.getLogger(__name__)


# Filter attribute -> query-string key
FILTER_PARAMS = {
    "status": "status",
    "ledger_date_start": "dataLancamentoInicio",
    "ledger_date_end": "dataLancamentoFim",
    "due_date_start": "dataVencimentoInicio",
    "due_date_end": "dataVencimentoFim",
    "payment_date_start": "dataPagamentoInicio",
    "payment_date_end": "dataPagamentoFim",
    "contract_number": "numeroContrato",
    "name": "nome",
    "document": "documento",
}


def build_movement_query_params(
    filters: MovementFilters,
    order: MovementOrder,
    page: int,
    limit: int
) -> Dict[str, Any]:
    """Query string for the ledgers; empty filter values are skipped."""
    params: Dict[str, Any] = {}
    for attr, key in FILTER_PARAMS.items():
        value = getattr(filters, attr)
        if value not in (None, ""):
            params[key] = value
    params["page"] = page
    params["limit"] = limit
    params["orderBy"] = order.field.value
    params["orderDirection"] = order.direction.value
    return params


class HttpMovementRepository(MovementRepositoryInterface):
    """REST implementation of the movement repository."""

    base_path = "/movimento"

    def __init__(self, client: ApiClient):
        self.client = client
        self.mapper = MovementMapper()

    async def list(
        self,
        kind: MovementKind,
        filters: MovementFilters,
        order: MovementOrder,
        page: int = 1,
        limit: int = 15
    ) -> MovementPage:
        params = build_movement_query_params(filters, order, page, limit)
        body = await self.client.get(f"{self.base_path}/{kind.value}", params=params)
        response = MovementListResponseDTO.model_validate(body or {})
        return MovementPage(
            data=[self.mapper.dto_to_domain(dto, kind) for dto in response.data],
            totals=self.mapper.totals_to_domain(response.totals, kind),
        )

    async def list_statuses(self, kind: MovementKind) -> List[str]:
        body = await self.client.get(f"{self.base_path}/{kind.value}/status")
        return MovementStatusListDTO.model_validate(body or {}).status

    async def settle(
        self,
        movement_id: int,
        settled: bool,
        payment_date: Optional[date] = None,
        effective_amount: Optional[Decimal] = None
    ) -> Movement:
        payload = self.mapper.settlement_payload(settled, payment_date, effective_amount)
        body = await self.client.patch(
            f"{self.base_path}/{movement_id}/pagamento", json=payload.to_payload()
        )
        logger.info(f"Movement {movement_id} payment updated (settled={settled})")
        row = body.get("movimento", body) if isinstance(body, dict) else body
        return self.mapper.dto_to_domain(MovementDTO.model_validate(row), self._kind_of(row))

    async def attach_proof(self, movement_id: int, proof: ProofFile) -> str:
        payload = self.mapper.proof_payload(proof)
        body = await self.client.post(
            f"{self.base_path}/{movement_id}/comprovante", json=payload.to_payload()
        )
        proof_url = ProofUploadResponseDTO.model_validate(body or {}).proof_url
        logger.info(f"Proof attached to movement {movement_id}")
        return proof_url

    async def download_proof(self, identifier: str) -> bytes:
        return await self.client.get_bytes(f"{self.base_path}/comprovante/{identifier}")

    async def exists(self, entity_id: int, month: int, year: int) -> bool:
        body = await self.client.get(
            f"{self.base_path}/verificar-existencia/{entity_id}/{month}/{year}"
        )
        return bool(body and body.get("existe"))

    async def generate(self, entity_id: int, month: int, year: int) -> dict:
        payload = MovementGenerationPayloadDTO(entity_id=entity_id, month=month, year=year)
        body = await self.client.post(f"{self.base_path}/gerar", json=payload.to_payload())
        logger.info(f"Movements generated for entity {entity_id} ({month:02d}/{year})")
        return body or {}

    @staticmethod
    def _kind_of(row: Dict[str, Any]) -> MovementKind:
        """Rows carry ``tipo`` R/D; anything but D reads as receivable."""
        return MovementKind.PAYABLE if row.get("tipo") == "D" else MovementKind.RECEIVABLE
