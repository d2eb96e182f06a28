"""
Contract mapper for converting between domain entities and backend wire DTOs.
"""

from typing import Any, Dict, Optional

from backoffice.application.dto.contract_dto import (
    BankAccountDTO,
    ContractItemDTO,
    ContractItemPayloadDTO,
    ContractPayloadDTO,
    ContractResponseDTO,
    ContractTypeDTO,
    PersonDTO,
    RoleHolderDTO,
)
from backoffice.domain.models.contract import Contract, ContractItem, MIN_DUE_DAY, MAX_DUE_DAY
from backoffice.domain.models.value_objects import (
    BankAccount,
    BilledParty,
    ContractNature,
    ContractType,
    Operation,
    RoleHolder,
    RoleKind,
    billed_party_for,
)
from backoffice.domain.services.change_detection import ContractChangeSet
from backoffice.domain.services.formatting import normalize_date, parse_date


# Wire key carrying the role id of each billed-party variant
PARTY_KEYS = {
    RoleKind.CLIENT: "client_role_id",
    RoleKind.PARTNER: "partner_role_id",
    RoleKind.SHAREHOLDER: "shareholder_role_id",
}


class ContractMapper:
    """Maps between the Contract aggregate and the contract wire DTOs."""

    def response_to_domain(self, dto: ContractResponseDTO) -> Contract:
        """Convert a backend contract into the aggregate."""
        contract_type = self.type_to_domain(dto.contract_type) if dto.contract_type else None
        contract = Contract(
            id=dto.contract_id,
            contract_number=dto.contract_number,
            billed_party=self._party_from_response(dto),
            contract_type_id=dto.contract_type_id,
            contract_type=contract_type,
            description=dto.description or "",
            active=dto.active,
            contract_url=dto.contract_url,
            items=[self.item_to_domain(item) for item in dto.items],
        )
        return contract

    def item_to_domain(self, dto: ContractItemDTO) -> ContractItem:
        return ContractItem(
            item_id=dto.contract_item_id,
            description=dto.description or "",
            amount=dto.amount,
            start_date=parse_date(dto.start_date),
            end_date=parse_date(dto.end_date),
            due_day=min(max(dto.due_day or MIN_DUE_DAY, MIN_DUE_DAY), MAX_DUE_DAY),
            active=dto.active,
            generate_invoice=dto.generate_invoice,
            interest_rate=dto.interest_rate,
            late_fee_rate=dto.late_fee_rate,
            bank_instructions=dto.bank_instructions,
            bank_account_id=dto.bank_account_id,
            operation=Operation(dto.operation) if dto.operation else Operation.DEBIT,
            due_month=dto.due_month or 0,
            due_year=dto.due_year or 0,
        )

    def type_to_domain(self, dto: ContractTypeDTO) -> ContractType:
        return ContractType(
            id=dto.contract_type_id,
            description=dto.description,
            nature=ContractNature(dto.nature),
            recurring=dto.recurring,
        )

    def bank_account_to_domain(self, dto: BankAccountDTO, entity_id: int) -> BankAccount:
        return BankAccount(
            id=dto.bank_account_id,
            entity_id=dto.entity_id or entity_id,
            bank_name=dto.bank_name or (dto.bank.name if dto.bank else None),
            agency=dto.agency,
            account_number=dto.account_number,
        )

    def role_holder_to_domain(self, kind: RoleKind, dto: RoleHolderDTO) -> Optional[RoleHolder]:
        """Rows without a role id for ``kind`` map to None."""
        role_id = getattr(dto, PARTY_KEYS[kind])
        if not role_id:
            return None
        person = dto.person or PersonDTO()
        return RoleHolder(
            kind=kind,
            role_id=role_id,
            name=person.name or dto.name or "",
            document=person.document or dto.document,
            entity_id=person.entity_id or dto.entity_id,
        )

    # Outbound

    def item_to_payload(self, item: ContractItem) -> ContractItemPayloadDTO:
        """
        Sanitize an item for transmission.

        Empty end date and bank instructions are left out entirely, dates go
        out as ``YYYY-MM-DD`` and due month/year are always present.
        """
        fields: Dict[str, Any] = {
            "description": item.description.strip(),
            "amount": float(item.amount),
            "start_date": normalize_date(item.start_date),
            "due_day": item.due_day,
            "active": item.active,
            "generate_invoice": item.generate_invoice,
            "interest_rate": float(item.interest_rate),
            "late_fee_rate": float(item.late_fee_rate),
            "operation": item.operation.value,
            "due_month": item.due_month or 0,
            "due_year": item.due_year or 0,
        }
        if item.item_id is not None:
            fields["contract_item_id"] = item.item_id
        end_date = normalize_date(item.end_date)
        if end_date:
            fields["end_date"] = end_date
        if item.bank_instructions and item.bank_instructions.strip():
            fields["bank_instructions"] = item.bank_instructions
        if item.bank_account_id is not None:
            fields["bank_account_id"] = item.bank_account_id
        return ContractItemPayloadDTO(**fields)

    def change_set_to_payload(self, changes: ContractChangeSet) -> ContractPayloadDTO:
        """Build the body for a create (full change set) or a partial update."""
        fields: Dict[str, Any] = {}
        for name, value in changes.fields.items():
            if name == "billed_party":
                fields.update(self._party_fields(value))
            elif name == "amount":
                fields["amount"] = float(value)
            else:
                fields[name] = value
        if changes.includes_items:
            fields["items"] = [self.item_to_payload(item) for item in changes.items]
        return ContractPayloadDTO(**fields)

    @staticmethod
    def _party_fields(party: Optional[BilledParty]) -> Dict[str, Optional[int]]:
        """The chosen role id plus explicit nulls for the other two keys."""
        fields = {key: None for key in PARTY_KEYS.values()}
        if party is not None:
            fields[PARTY_KEYS[party.kind]] = party.role_id
        return fields

    @staticmethod
    def _party_from_response(dto: ContractResponseDTO) -> Optional[BilledParty]:
        candidates = (
            (RoleKind.CLIENT, dto.client_role_id, dto.client),
            (RoleKind.PARTNER, dto.partner_role_id, dto.partner),
            (RoleKind.SHAREHOLDER, dto.shareholder_role_id, dto.shareholder),
        )
        for kind, role_id, person in candidates:
            if role_id:
                return billed_party_for(
                    kind,
                    role_id,
                    name=person.name if person else None,
                    entity_id=person.entity_id if person else None,
                )
        return None
