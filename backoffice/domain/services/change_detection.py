"""
Change detection for contract edits.

Compares an edited contract against the baseline loaded from the backend
and produces the minimal set of changed top-level fields. Items are
diffed as a unit: when any item differs, or the count differs, the whole
current list is sent, never a subset. Whenever the edited contract has
items they are sent anyway, so the backend always recomputes from the
complete list.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from backoffice.domain.models.contract import Contract, ContractItem
from backoffice.domain.models.value_objects import same_party


logger = logging.getLogger(__name__)


SCALAR_FIELDS = (
    "contract_number",
    "billed_party",
    "contract_type_id",
    "description",
    "amount",
    "active",
    "contract_url",
)


@dataclass
class ContractChangeSet:
    """Outcome of comparing an edited contract with its baseline."""

    is_new: bool
    fields: Dict[str, Any] = field(default_factory=dict)
    items: Optional[List[ContractItem]] = None
    items_changed: bool = False

    @property
    def includes_items(self) -> bool:
        return self.items is not None

    @property
    def is_empty(self) -> bool:
        return not self.fields and self.items is None

    def changed_field_names(self) -> List[str]:
        names = list(self.fields)
        if self.includes_items:
            names.append("items")
        return names


class ContractChangeDetector:
    """Computes full or partial submissions for contracts."""

    def full(self, contract: Contract) -> ContractChangeSet:
        """Every field and every item; used for contracts not yet persisted."""
        return ContractChangeSet(
            is_new=contract.is_new,
            fields={name: getattr(contract, name) for name in SCALAR_FIELDS},
            items=list(contract.items),
            items_changed=True,
        )

    def detect(self, original: Optional[Contract], edited: Contract) -> ContractChangeSet:
        if original is None or edited.is_new:
            return self.full(edited)

        changed = {
            name: getattr(edited, name)
            for name in SCALAR_FIELDS
            if self._differs(name, getattr(original, name), getattr(edited, name))
        }

        items_changed = self.items_differ(original.items, edited.items)
        items = list(edited.items) if items_changed else None

        # Items ride along whenever the form has any, whatever the diff said
        if edited.items:
            items = list(edited.items)

        change_set = ContractChangeSet(
            is_new=False,
            fields=changed,
            items=items,
            items_changed=items_changed,
        )
        logger.debug(
            f"Contract {edited.id} changes: {change_set.changed_field_names()} "
            f"(items differ: {items_changed})"
        )
        return change_set

    @staticmethod
    def items_differ(original: List[ContractItem], edited: List[ContractItem]) -> bool:
        """All-or-none: True when the count or any compared field of any item differs."""
        if len(original) != len(edited):
            return True
        return any(a.comparable() != b.comparable() for a, b in zip(original, edited))

    @staticmethod
    def _differs(name: str, before: Any, after: Any) -> bool:
        if name == "billed_party":
            return not same_party(before, after)
        return before != after
