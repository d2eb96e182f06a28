"""
Contract editor state.

Holds the working copy of one contract while its dialog is open: the
selected role tab, per-row amount text being typed, the unsaved-changes
flag and the submit guard.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, TypeVar

from backoffice.application.notifications import Notifier
from backoffice.application.use_cases.base_use_case import UseCaseResult
from backoffice.application.use_cases.contract_use_cases import SaveContractRequest, SaveContractUseCase
from backoffice.domain.models.base import DomainException, ValidationError
from backoffice.domain.models.contract import Contract, ContractItem
from backoffice.domain.models.value_objects import BankAccount, ContractType, RoleHolder, RoleKind
from backoffice.domain.repositories.reference_data_repository import ReferenceDataRepository
from backoffice.domain.services.formatting import amount_from_keystrokes, format_decimal_br


logger = logging.getLogger(__name__)

S = TypeVar('S')

EDITABLE_FIELDS = ("contract_number", "description", "active", "contract_url")


def reindex_after_removal(states: Dict[int, S], removed: int) -> Dict[int, S]:
    """
    Per-row state after removing row ``removed``: earlier rows keep their
    index, the removed row is dropped, later rows shift down by one.
    """
    result: Dict[int, S] = {}
    for index, value in states.items():
        if index < removed:
            result[index] = value
        elif index > removed:
            result[index - 1] = value
    return result


def shift_for_prepend(states: Dict[int, S]) -> Dict[int, S]:
    """Per-row state after a row is inserted at the top."""
    return {index + 1: value for index, value in states.items()}


class ContractForm:
    """Working state of one contract dialog."""

    def __init__(
        self,
        contract: Optional[Contract] = None,
        reference_data: Optional[ReferenceDataRepository] = None,
        notifier: Optional[Notifier] = None,
        today: Optional[date] = None
    ):
        source = contract or Contract()
        self.original: Optional[Contract] = None if source.is_new else source.snapshot()
        self.contract: Contract = source.snapshot()
        self.reference_data = reference_data
        self.notifier = notifier
        self.today = today

        self._original_party = source.billed_party
        self.role_kind: Optional[RoleKind] = source.role_kind
        self.amount_texts: Dict[int, str] = {}
        self.has_unsaved_changes = False
        self.is_submitting = False

    @property
    def items(self) -> List[ContractItem]:
        return self.contract.items

    @property
    def shows_due_month(self) -> bool:
        """Due month/year inputs only apply to recurring contract types."""
        return self.contract.is_recurring

    def _touch(self) -> None:
        self.has_unsaved_changes = True

    # Billed party

    def select_role_kind(self, kind: RoleKind) -> None:
        """
        Switch the role tab.

        Switching clears the billed party; going back to the tab of the
        party the contract was loaded with restores that party.
        """
        kind = RoleKind(kind)
        if kind == self.role_kind:
            return
        self.role_kind = kind
        if self._original_party is not None and self._original_party.kind == kind:
            self.contract.bill_to(self._original_party)
        else:
            self.contract.clear_billed_party()
        self._touch()

    def select_party(self, holder: RoleHolder) -> None:
        if self.role_kind is None:
            self.role_kind = holder.kind
        if holder.kind != self.role_kind:
            raise ValidationError(
                f"Selected {holder.kind.label} does not match the {self.role_kind.label} tab",
                "billed_party"
            )
        self.contract.bill_to(holder.as_party())
        self._touch()

    # Header fields

    def set_contract_type(self, contract_type: ContractType) -> None:
        self.contract.set_contract_type(contract_type)
        self._touch()

    def set_field(self, name: str, value) -> None:
        if name not in EDITABLE_FIELDS:
            raise ValidationError(f"Field {name} is not editable", name)
        setattr(self.contract, name, value)
        self._touch()

    # Items

    def add_item(self) -> ContractItem:
        item = self.contract.add_item(self.today)
        self.amount_texts = shift_for_prepend(self.amount_texts)
        self._touch()
        return item

    def remove_item(self, index: int) -> ContractItem:
        item = self.contract.remove_item(index)
        self.amount_texts = reindex_after_removal(self.amount_texts, index)
        self._touch()
        return item

    def update_item(self, index: int, **changes) -> ContractItem:
        item = self.contract.update_item(index, **changes)
        self._touch()
        return item

    def set_due_day(self, index: int, raw: str) -> ContractItem:
        """Non-numeric input falls back to day 1; values are kept within 1..28."""
        try:
            day = int(raw)
        except (TypeError, ValueError):
            day = 1
        return self.update_item(index, due_day=min(max(day, 1), 28))

    def type_amount(self, index: int, raw: str) -> Decimal:
        """Keystrokes are read as cents; the stored amount is valid after every key."""
        amount = amount_from_keystrokes(raw)
        self.update_item(index, amount=amount)
        self.amount_texts[index] = raw
        return amount

    def blur_amount(self, index: int) -> str:
        text = format_decimal_br(self.items[index].amount)
        self.amount_texts[index] = text
        return text

    def amount_text(self, index: int) -> str:
        if index in self.amount_texts:
            return self.amount_texts[index]
        return format_decimal_br(self.items[index].amount)

    async def request_bank_account(self, index: int) -> List[BankAccount]:
        """
        Accounts the user can pick for item ``index``.

        When the billed party's entity owns exactly one account it is
        assigned straight away.
        """
        party = self.contract.billed_party
        if party is None or party.entity_id is None or self.reference_data is None:
            return []
        try:
            accounts = await self.reference_data.list_bank_accounts(party.entity_id)
        except DomainException as exc:
            logger.error(f"Bank account lookup failed for entity {party.entity_id}: {exc.message}")
            if self.notifier:
                self.notifier.error("Could not load the entity's bank accounts")
            return []
        if len(accounts) == 1:
            self.update_item(index, bank_account_id=accounts[0].id)
            if self.notifier:
                self.notifier.info("Bank account selected automatically")
        return accounts

    # Submission

    def validate(self) -> None:
        self.contract.validate_for_submission(self.role_kind)

    async def submit(self, use_case: SaveContractUseCase) -> UseCaseResult[Contract]:
        """Save through ``use_case``; a second submit while one is in flight is refused."""
        if self.is_submitting:
            return UseCaseResult.error_result("A save is already in progress", "IN_PROGRESS")
        self.is_submitting = True
        try:
            result = await use_case.execute(
                SaveContractRequest(self.contract, self.original, self.role_kind)
            )
        finally:
            self.is_submitting = False

        if result.success:
            self.has_unsaved_changes = False
            if result.data is not None:
                # Server copy carries the item ids later updates must reference
                self.contract = result.data.snapshot()
                self.role_kind = self.contract.role_kind or self.role_kind
                self.amount_texts = {}
            self.original = None if self.contract.is_new else self.contract.snapshot()
            self._original_party = self.contract.billed_party
        return result

    def request_close(self, discard: bool = False) -> bool:
        """True when the dialog may close; unsaved edits need ``discard``."""
        if self.has_unsaved_changes and not discard:
            return False
        self.has_unsaved_changes = False
        return True
