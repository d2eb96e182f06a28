"""
Value objects and enumerations shared by the contract and movement models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from backoffice.domain.models.base import ValueObject, ValidationError


class ContractNature(str, Enum):
    """Whether a contract type produces revenue or expense."""
    REVENUE = "R"
    EXPENSE = "D"


class Operation(str, Enum):
    """Sign applied to an item's movements."""
    CREDIT = "C"
    DEBIT = "D"

    @classmethod
    def for_nature(cls, nature: Optional[ContractNature]) -> "Operation":
        """REVENUE maps to CREDIT, anything else to DEBIT."""
        return cls.CREDIT if nature == ContractNature.REVENUE else cls.DEBIT


class RoleKind(str, Enum):
    """Role a billed party plays towards the back office."""
    CLIENT = "C"
    PARTNER = "P"
    SHAREHOLDER = "S"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]

    @classmethod
    def label_for(cls, code: Optional[str]) -> str:
        """Display label for a raw role code; unknown codes read as client."""
        try:
            return cls(code).label
        except ValueError:
            return ROLE_LABELS[cls.CLIENT]


ROLE_LABELS = {
    RoleKind.CLIENT: "Cliente",
    RoleKind.PARTNER: "Parceiro",
    RoleKind.SHAREHOLDER: "Sócio",
}


@dataclass(frozen=True)
class ContractType(ValueObject):
    """Immutable catalogue entry describing how a contract bills."""

    id: int
    description: str
    nature: ContractNature
    recurring: bool = False

    def validate(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Contract type description cannot be empty", "description")

    @property
    def operation(self) -> Operation:
        return Operation.for_nature(self.nature)


# Billed party: exactly one role binding per contract

@dataclass(frozen=True)
class ClientParty(ValueObject):
    role_id: int
    name: Optional[str] = None
    entity_id: Optional[int] = None

    kind = RoleKind.CLIENT

    def validate(self) -> None:
        _check_role_id(self.role_id)


@dataclass(frozen=True)
class PartnerParty(ValueObject):
    role_id: int
    name: Optional[str] = None
    entity_id: Optional[int] = None

    kind = RoleKind.PARTNER

    def validate(self) -> None:
        _check_role_id(self.role_id)


@dataclass(frozen=True)
class ShareholderParty(ValueObject):
    role_id: int
    name: Optional[str] = None
    entity_id: Optional[int] = None

    kind = RoleKind.SHAREHOLDER

    def validate(self) -> None:
        _check_role_id(self.role_id)


BilledParty = Union[ClientParty, PartnerParty, ShareholderParty]

PARTY_TYPES = {
    RoleKind.CLIENT: ClientParty,
    RoleKind.PARTNER: PartnerParty,
    RoleKind.SHAREHOLDER: ShareholderParty,
}


def _check_role_id(role_id: int) -> None:
    if role_id is None or role_id <= 0:
        raise ValidationError("Billed party requires a positive role id", "billed_party")


def billed_party_for(
    kind: RoleKind,
    role_id: int,
    name: Optional[str] = None,
    entity_id: Optional[int] = None
) -> BilledParty:
    """Build the billed-party variant for a role kind."""
    return PARTY_TYPES[RoleKind(kind)](role_id=role_id, name=name, entity_id=entity_id)


def same_party(a: Optional[BilledParty], b: Optional[BilledParty]) -> bool:
    """Parties match on role kind and role id only; display data is ignored."""
    if a is None or b is None:
        return a is b
    return a.kind == b.kind and a.role_id == b.role_id


@dataclass(frozen=True)
class RoleHolder(ValueObject):
    """Search result for a client, partner or shareholder."""

    kind: RoleKind
    role_id: int
    name: str
    document: Optional[str] = None
    entity_id: Optional[int] = None

    def validate(self) -> None:
        _check_role_id(self.role_id)

    def as_party(self) -> BilledParty:
        return billed_party_for(self.kind, self.role_id, self.name, self.entity_id)


@dataclass(frozen=True)
class BankAccount(ValueObject):
    """Bank account owned by an entity; referenced by contract items."""

    id: int
    entity_id: int
    bank_name: Optional[str] = None
    agency: Optional[str] = None
    account_number: Optional[str] = None

    def validate(self) -> None:
        if self.id is None:
            raise ValidationError("Bank account id is required", "bank_account_id")

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.bank_name, self.agency, self.account_number) if p]
        return " - ".join(parts) if parts else str(self.id)
