"""
Contract domain model.
A contract binds one billed party to a contract type and owns an ordered
list of billing items; its amount is always the sum of the item amounts.
"""

from dataclasses import dataclass, field, replace, fields
from datetime import date
from decimal import Decimal
from typing import Optional, List, Any, Tuple

from backoffice.domain.models.base import (
    AggregateRoot,
    ValidationError,
    BusinessRuleViolation,
    DomainEvent
)
from backoffice.domain.models.value_objects import (
    BilledParty,
    ContractType,
    Operation,
    RoleKind,
    same_party
)
from backoffice.domain.services.formatting import MAX_AMOUNT, to_decimal


MIN_DUE_DAY = 1
MAX_DUE_DAY = 28
MAX_RATE = Decimal("100")


# Domain Events

class ContractTypeChangedEvent(DomainEvent):
    """Raised when a contract's type changes and item operations are recomputed."""

    def __init__(self, contract_id: Optional[int], contract_type_id: int, operation: str):
        super().__init__()
        self.contract_id = contract_id
        self.contract_type_id = contract_type_id
        self.operation = operation

    @property
    def event_name(self) -> str:
        return "contract.type_changed"


class ContractItemAddedEvent(DomainEvent):
    def __init__(self, contract_id: Optional[int], item_count: int):
        super().__init__()
        self.contract_id = contract_id
        self.item_count = item_count

    @property
    def event_name(self) -> str:
        return "contract.item_added"


class ContractItemRemovedEvent(DomainEvent):
    def __init__(self, contract_id: Optional[int], index: int, item_id: Optional[int]):
        super().__init__()
        self.contract_id = contract_id
        self.index = index
        self.item_id = item_id

    @property
    def event_name(self) -> str:
        return "contract.item_removed"


@dataclass
class ContractItem:
    """
    One billing term of a contract.

    ``item_id`` is only present once the backend has persisted the item.
    ``due_month``/``due_year`` are meaningful for recurring contract types
    and stay at 0 otherwise.
    """

    description: str = ""
    amount: Decimal = Decimal("0.00")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    due_day: int = MIN_DUE_DAY
    active: bool = True
    generate_invoice: bool = False
    interest_rate: Decimal = Decimal("0.00")
    late_fee_rate: Decimal = Decimal("0.00")
    bank_instructions: Optional[str] = None
    bank_account_id: Optional[int] = None
    operation: Operation = Operation.DEBIT
    due_month: int = 0
    due_year: int = 0
    item_id: Optional[int] = None

    # Fields compared when deciding whether the item list changed
    COMPARED_FIELDS = (
        "description", "amount", "start_date", "end_date", "due_day", "active",
        "generate_invoice", "interest_rate", "late_fee_rate", "bank_instructions",
        "bank_account_id", "due_month", "due_year",
    )

    def __post_init__(self):
        self.amount = to_decimal(self.amount)
        self.interest_rate = to_decimal(self.interest_rate)
        self.late_fee_rate = to_decimal(self.late_fee_rate)
        self.operation = Operation(self.operation)
        self.due_month = self.due_month or 0
        self.due_year = self.due_year or 0
        self.validate()

    def validate(self) -> None:
        """Range checks that hold at every point of an item's life."""
        if self.amount < 0 or self.amount > MAX_AMOUNT:
            raise ValidationError(f"Item amount must be between 0 and {MAX_AMOUNT}", "amount")
        if not MIN_DUE_DAY <= self.due_day <= MAX_DUE_DAY:
            raise ValidationError(
                f"Due day must be between {MIN_DUE_DAY} and {MAX_DUE_DAY}", "due_day"
            )
        for name in ("interest_rate", "late_fee_rate"):
            rate = getattr(self, name)
            if rate < 0 or rate > MAX_RATE:
                raise ValidationError("Rates must be between 0 and 100", name)
        if not 0 <= self.due_month <= 12:
            raise ValidationError("Due month must be between 0 and 12", "due_month")
        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date", "end_date")

    def comparable(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self.COMPARED_FIELDS)

    def copy(self, **changes) -> "ContractItem":
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)

    @property
    def is_persisted(self) -> bool:
        return self.item_id is not None


ITEM_FIELD_NAMES = {f.name for f in fields(ContractItem)}


@dataclass(eq=False)
class Contract(AggregateRoot):
    """
    Contract aggregate root.
    Owns its items exclusively and keeps the derived amount consistent.
    """

    contract_number: Optional[str] = None
    billed_party: Optional[BilledParty] = None
    contract_type_id: Optional[int] = None
    contract_type: Optional[ContractType] = None
    description: str = ""
    active: bool = True
    contract_url: Optional[str] = None
    items: List[ContractItem] = field(default_factory=list)

    def __post_init__(self):
        if self.contract_type is not None:
            self.contract_type_id = self.contract_type.id

    @property
    def amount(self) -> Decimal:
        """Always the sum of item amounts; never set directly."""
        return sum((item.amount for item in self.items), Decimal("0.00"))

    @property
    def is_recurring(self) -> bool:
        return bool(self.contract_type and self.contract_type.recurring)

    @property
    def operation(self) -> Operation:
        return Operation.for_nature(self.contract_type.nature if self.contract_type else None)

    @property
    def role_kind(self) -> Optional[RoleKind]:
        return self.billed_party.kind if self.billed_party else None

    # Billed party

    def bill_to(self, party: BilledParty) -> None:
        """Bind the contract to a single billed party, replacing any previous one."""
        self.billed_party = party

    def clear_billed_party(self) -> None:
        self.billed_party = None

    def is_billed_to(self, party: Optional[BilledParty]) -> bool:
        return same_party(self.billed_party, party)

    # Contract type

    def set_contract_type(self, contract_type: ContractType) -> None:
        """
        Change the contract type.

        When the nature differs from the previous one, every item's
        operation is recomputed in one pass.
        """
        previous_nature = self.contract_type.nature if self.contract_type else None
        self.contract_type = contract_type
        self.contract_type_id = contract_type.id

        if previous_nature != contract_type.nature:
            operation = contract_type.operation
            for item in self.items:
                item.operation = operation
            self.add_event(ContractTypeChangedEvent(self.id, contract_type.id, operation.value))

    # Items

    def add_item(self, today: Optional[date] = None) -> ContractItem:
        """Prepend a fresh item and return it."""
        today = today or date.today()
        item = ContractItem(
            start_date=today,
            due_day=MIN_DUE_DAY,
            operation=self.operation,
            due_month=today.month if self.is_recurring else 0,
            due_year=today.year if self.is_recurring else 0,
        )
        self.items.insert(0, item)
        self.add_event(ContractItemAddedEvent(self.id, len(self.items)))
        return item

    def remove_item(self, index: int) -> ContractItem:
        """Remove the item at ``index``."""
        self._check_index(index)
        item = self.items.pop(index)
        self.add_event(ContractItemRemovedEvent(self.id, index, item.item_id))
        return item

    def update_item(self, index: int, **changes) -> ContractItem:
        """Replace the item at ``index`` with a validated copy carrying ``changes``."""
        self._check_index(index)
        unknown = set(changes) - ITEM_FIELD_NAMES
        if unknown:
            raise ValidationError(f"Unknown item fields: {', '.join(sorted(unknown))}")
        if "operation" in changes:
            raise BusinessRuleViolation("Item operation is derived from the contract type")
        updated = self.items[index].copy(**changes)
        self.items[index] = updated
        return updated

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise ValidationError(f"No item at position {index}", "items")

    # Submission

    def validate_for_submission(self, role_kind: Optional[RoleKind] = None) -> None:
        """
        Pre-submission checks; the first failure wins.

        ``role_kind`` is the role tab chosen in the editor, falling back to
        the bound party's kind.
        """
        if (role_kind or self.role_kind) is None:
            raise ValidationError("Select the billed party type", "role_kind")
        if not self.contract_type_id:
            raise ValidationError("Select the contract type", "contract_type_id")
        if not self.description or not self.description.strip():
            raise ValidationError("Description is required", "description")
        if not self.items:
            raise ValidationError("Add at least one item to the contract", "items")
        for item in self.items:
            if not item.description or not item.description.strip():
                raise ValidationError("Item description is required", "items.description")
            if item.amount <= 0:
                raise ValidationError("Item amount must be greater than zero", "items.amount")
            if item.start_date is None:
                raise ValidationError("Item start date is required", "items.start_date")

    def snapshot(self) -> "Contract":
        """Detached copy used as the baseline for change detection."""
        return replace(
            self,
            items=[item.copy() for item in self.items],
        )
