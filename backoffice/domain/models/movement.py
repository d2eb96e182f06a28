"""
Movement domain model.
A movement is the dated cash-flow record produced by the backend for one
occurrence of a contract item. The console classifies it, presents its
corrections and records its settlement.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any

from backoffice.domain.models.base import (
    AggregateRoot,
    ValidationError,
    BusinessRuleViolation,
    DomainEvent
)
from backoffice.domain.services.formatting import to_decimal


class MovementKind(str, Enum):
    """Receivable movements come from revenue contracts, payables from expenses."""
    RECEIVABLE = "receitas"
    PAYABLE = "despesas"

    @property
    def settled_label(self) -> str:
        return "RECEBIDO" if self is MovementKind.RECEIVABLE else "PAGO"


class MovementStatus(str, Enum):
    """Display status. SETTLED is terminal."""
    OPEN = "OPEN"
    OVERDUE = "OVERDUE"
    SETTLED = "SETTLED"


OPEN_LABEL = "EM ABERTO"
OVERDUE_LABEL = "EM ATRASO"
SETTLED_LABELS = ("PAGO", "RECEBIDO")

STATUS_COLORS = {
    "PAGO": "green",
    "RECEBIDO": "green",
    OPEN_LABEL: "blue",
    OVERDUE_LABEL: "red",
}
NEUTRAL_COLOR = "gray"


def status_color(label: Optional[str]) -> str:
    """Fixed lookup from a status label to its display colour."""
    return STATUS_COLORS.get((label or "").upper(), NEUTRAL_COLOR)


# Domain Events

class MovementSettledEvent(DomainEvent):
    """Event raised when a movement is settled."""

    def __init__(self, movement_id: int, payment_date: date, effective_amount: Decimal):
        super().__init__()
        self.movement_id = movement_id
        self.payment_date = payment_date
        self.effective_amount = effective_amount

    @property
    def event_name(self) -> str:
        return "movement.settled"


class MovementProofAttachedEvent(DomainEvent):
    def __init__(self, movement_id: int, proof_url: str):
        super().__init__()
        self.movement_id = movement_id
        self.proof_url = proof_url

    @property
    def event_name(self) -> str:
        return "movement.proof_attached"


@dataclass(eq=False)
class Movement(AggregateRoot):
    """
    Cash-flow record for one contract item occurrence.

    Interest and late-fee amounts are computed by the backend and only
    consumed here.
    """

    kind: MovementKind = MovementKind.RECEIVABLE
    contract_item_id: Optional[int] = None
    due_date: Optional[date] = None
    payment_date: Optional[date] = None
    ledger_date: Optional[date] = None
    settled: bool = False
    face_amount: Decimal = Decimal("0.00")
    effective_amount: Optional[Decimal] = None
    proof_url: Optional[str] = None
    interest_amount: Decimal = Decimal("0.00")
    late_fee_amount: Decimal = Decimal("0.00")
    interest_rate: Decimal = Decimal("0.00")
    late_fee_rate: Decimal = Decimal("0.00")
    generate_invoice: bool = False

    # Contract context carried by the listing
    description: Optional[str] = None
    contract_id: Optional[int] = None
    contract_number: Optional[str] = None
    contract_url: Optional[str] = None
    contract_amount: Optional[Decimal] = None
    contract_active: Optional[bool] = None
    party_name: Optional[str] = None
    party_document: Optional[str] = None
    role_code: Optional[str] = None

    # Status label reported by the backend, kept for the colour lookup
    reported_status: Optional[str] = None

    def __post_init__(self):
        self.kind = MovementKind(self.kind)
        self.face_amount = to_decimal(self.face_amount)
        self.interest_amount = to_decimal(self.interest_amount)
        self.late_fee_amount = to_decimal(self.late_fee_amount)
        self.interest_rate = to_decimal(self.interest_rate)
        self.late_fee_rate = to_decimal(self.late_fee_rate)
        if self.effective_amount is not None:
            self.effective_amount = to_decimal(self.effective_amount)

    @property
    def corrected_total(self) -> Decimal:
        """Face value plus interest plus late fee."""
        return self.face_amount + self.interest_amount + self.late_fee_amount

    def status(self, today: Optional[date] = None) -> MovementStatus:
        """OPEN up to and including the due date, OVERDUE after it, SETTLED once paid."""
        if self.settled:
            return MovementStatus.SETTLED
        today = today or date.today()
        if self.due_date is None or today <= self.due_date:
            return MovementStatus.OPEN
        return MovementStatus.OVERDUE

    def status_label(self, today: Optional[date] = None) -> str:
        status = self.status(today)
        if status is MovementStatus.SETTLED:
            return self.kind.settled_label
        return OPEN_LABEL if status is MovementStatus.OPEN else OVERDUE_LABEL

    def status_color(self, today: Optional[date] = None) -> str:
        return status_color(self.reported_status or self.status_label(today))

    def overdue_days(self, today: Optional[date] = None) -> int:
        """
        Whole days past due.

        Unsettled movements count up to ``today``; settled ones count up to
        the payment date. Never negative.
        """
        if self.due_date is None:
            return 0
        if self.settled:
            end = self.payment_date
            if end is None:
                return 0
        else:
            end = today or date.today()
        return max(0, (end - self.due_date).days)

    @property
    def display_date(self) -> Optional[date]:
        """Payment date for settled movements, due date otherwise."""
        if self.settled and self.payment_date:
            return self.payment_date
        return self.due_date

    def settle(self, payment_date: date, effective_amount: Optional[Decimal] = None) -> None:
        """
        Record the settlement.

        The effective amount defaults to the face amount. Settling again
        only corrects the recorded payment.
        """
        if payment_date is None:
            raise ValidationError("Payment date is required to settle a movement", "payment_date")
        amount = self.face_amount if effective_amount is None else to_decimal(effective_amount)
        if amount < 0:
            raise ValidationError("Effective amount cannot be negative", "effective_amount")

        self.settled = True
        self.payment_date = payment_date
        self.effective_amount = amount
        self.reported_status = self.kind.settled_label
        self.add_event(MovementSettledEvent(self.id, payment_date, amount))

    def unsettle(self) -> None:
        raise BusinessRuleViolation("Settled movements cannot be reopened")

    def attach_proof(self, proof_url: str) -> None:
        if not proof_url:
            raise ValidationError("Proof URL cannot be empty", "proof_url")
        self.proof_url = proof_url
        self.add_event(MovementProofAttachedEvent(self.id, proof_url))

    @property
    def proof_identifier(self) -> Optional[str]:
        """Opaque id of the proof: last path segment without its extension."""
        if not self.proof_url:
            return None
        return proof_identifier_from_url(self.proof_url)


def proof_identifier_from_url(url: str) -> str:
    last = url.rstrip("/").split("/")[-1]
    return last.split(".")[0]


def proof_file_name_from_url(url: str) -> str:
    return url.rstrip("/").split("/")[-1]


@dataclass
class MovementTotals:
    """Aggregates the backend reports for a filtered movement set."""

    total_records: int = 0
    face_total: Decimal = Decimal("0.00")
    settled_total: Decimal = Decimal("0.00")
    open_total: Decimal = Decimal("0.00")
    interest_total: Decimal = Decimal("0.00")
    late_fee_total: Decimal = Decimal("0.00")
    corrected_total: Decimal = Decimal("0.00")
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProofFile:
    """Payment proof selected for upload."""

    file_name: str
    content: bytes
    mime_type: Optional[str] = None

    @property
    def extension(self) -> str:
        if "." not in self.file_name:
            return ""
        return self.file_name.rsplit(".", 1)[-1].lower()

    @property
    def size(self) -> int:
        return len(self.content)
