"""
Movement listing filters and the ordering policy applied to them.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Tuple


class MovementSortField(str, Enum):
    """Sortable date columns, valued with the backend column names."""
    DUE_DATE = "data_vencimento"
    PAYMENT_DATE = "data_pagamento"
    LEDGER_DATE = "data_lancamento"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class MovementFilters:
    """Filters offered by the receivable and payable ledgers. Dates are ``YYYY-MM-DD``."""

    status: Optional[str] = None
    ledger_date_start: Optional[str] = None
    ledger_date_end: Optional[str] = None
    due_date_start: Optional[str] = None
    due_date_end: Optional[str] = None
    payment_date_start: Optional[str] = None
    payment_date_end: Optional[str] = None
    contract_number: Optional[str] = None
    name: Optional[str] = None
    document: Optional[str] = None

    def active_filters(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) not in (None, ""))

    @property
    def has_due_range(self) -> bool:
        return bool(self.due_date_start or self.due_date_end)

    @property
    def has_payment_range(self) -> bool:
        return bool(self.payment_date_start or self.payment_date_end)

    @property
    def has_ledger_range(self) -> bool:
        return bool(self.ledger_date_start or self.ledger_date_end)


@dataclass(frozen=True)
class MovementOrder:
    field: MovementSortField
    direction: SortDirection = SortDirection.DESC


DEFAULT_ORDER = MovementOrder(MovementSortField.DUE_DATE)


class MovementOrderingPolicy:
    """
    Picks the sort column from the active date filters.

    Priority is due-date range, then payment-date range, then ledger-date
    range. No filters, a status filter alone, or no matching range all
    fall back to due date. Always descending.
    """

    PRIORITY = (
        ("has_due_range", MovementSortField.DUE_DATE),
        ("has_payment_range", MovementSortField.PAYMENT_DATE),
        ("has_ledger_range", MovementSortField.LEDGER_DATE),
    )

    def order_for(self, filters: Optional[MovementFilters]) -> MovementOrder:
        if filters is None:
            return DEFAULT_ORDER
        active = filters.active_filters()
        if not active or active == ("status",):
            return DEFAULT_ORDER
        for flag, sort_field in self.PRIORITY:
            if getattr(filters, flag):
                return MovementOrder(sort_field)
        return DEFAULT_ORDER
