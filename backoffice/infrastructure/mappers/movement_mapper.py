"""
Movement mapper for converting between domain entities and backend wire DTOs.
"""

import base64
from datetime import date
from decimal import Decimal
from typing import Optional

from backoffice.application.dto.movement_dto import (
    MovementDTO,
    MovementTotalsDTO,
    ProofUploadPayloadDTO,
    SettlementPayloadDTO,
)
from backoffice.domain.models.movement import Movement, MovementKind, MovementTotals, ProofFile
from backoffice.domain.services.formatting import normalize_date, parse_date, to_decimal


class MovementMapper:
    """Maps between Movement domain entity and the movement wire DTOs."""

    def dto_to_domain(self, dto: MovementDTO, kind: MovementKind) -> Movement:
        return Movement(
            id=dto.movement_id,
            kind=kind,
            contract_item_id=dto.contract_item_id,
            due_date=parse_date(dto.due_date),
            payment_date=parse_date(dto.payment_date),
            ledger_date=parse_date(dto.ledger_date),
            settled=dto.settled,
            face_amount=dto.face_amount,
            effective_amount=dto.effective_amount,
            proof_url=dto.proof_url,
            interest_amount=dto.interest_amount,
            late_fee_amount=dto.late_fee_amount,
            interest_rate=dto.interest_rate,
            late_fee_rate=dto.late_fee_rate,
            generate_invoice=dto.generate_invoice,
            description=dto.description,
            contract_id=dto.contract_id,
            contract_number=dto.contract_number,
            contract_url=dto.contract_url,
            contract_amount=to_decimal(dto.contract_amount) if dto.contract_amount is not None else None,
            contract_active=dto.contract_active,
            party_name=dto.party_name,
            party_document=dto.party_document,
            role_code=dto.role_code,
            reported_status=dto.status,
        )

    def totals_to_domain(self, dto: MovementTotalsDTO, kind: MovementKind) -> MovementTotals:
        settled = dto.received_total if kind is MovementKind.RECEIVABLE else dto.paid_total
        return MovementTotals(
            total_records=dto.total_records,
            face_total=to_decimal(dto.face_total),
            settled_total=to_decimal(settled),
            open_total=to_decimal(dto.open_total),
            interest_total=to_decimal(dto.interest_total),
            late_fee_total=to_decimal(dto.late_fee_total),
            corrected_total=to_decimal(dto.corrected_total),
        )

    def settlement_payload(
        self,
        settled: bool,
        payment_date: Optional[date],
        effective_amount: Optional[Decimal]
    ) -> SettlementPayloadDTO:
        """
        ``dataPagamento`` goes out only when settled; ``valorEfetivo`` is
        zero when not settled.
        """
        if not settled:
            return SettlementPayloadDTO(settled=False, effective_amount=0.0)
        fields = {"settled": True, "effective_amount": float(to_decimal(effective_amount))}
        date_text = normalize_date(payment_date)
        if date_text:
            fields["payment_date"] = date_text
        return SettlementPayloadDTO(**fields)

    def proof_payload(self, proof: ProofFile) -> ProofUploadPayloadDTO:
        return ProofUploadPayloadDTO(
            file_base64=base64.b64encode(proof.content).decode("ascii"),
            file_name=proof.file_name,
            file_type=proof.extension,
        )
