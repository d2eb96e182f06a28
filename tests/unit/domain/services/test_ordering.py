"""
Unit tests for the movement ordering policy.
"""

from backoffice.domain.services.ordering import (
    MovementFilters,
    MovementOrderingPolicy,
    MovementSortField,
    SortDirection,
)


class TestMovementOrderingPolicy:
    """Test cases for MovementOrderingPolicy."""

    def setup_method(self):
        """Set up test fixtures."""
        self.policy = MovementOrderingPolicy()

    def test_no_filters(self):
        """Test no filters orders by due date descending."""
        order = self.policy.order_for(MovementFilters())
        assert order.field == MovementSortField.DUE_DATE
        assert order.direction == SortDirection.DESC
        assert self.policy.order_for(None).field == MovementSortField.DUE_DATE

    def test_status_only(self):
        """Test a status filter alone keeps due date ordering."""
        order = self.policy.order_for(MovementFilters(status="all"))
        assert order.field == MovementSortField.DUE_DATE

    def test_payment_range_alone(self):
        """Test a payment start date orders by payment date."""
        order = self.policy.order_for(MovementFilters(payment_date_start="2024-01-01"))
        assert order.field == MovementSortField.PAYMENT_DATE
        assert order.direction == SortDirection.DESC

    def test_ledger_range_alone(self):
        """Test a ledger end date orders by ledger date."""
        order = self.policy.order_for(MovementFilters(ledger_date_end="2024-12-31"))
        assert order.field == MovementSortField.LEDGER_DATE

    def test_due_range_has_priority(self):
        """Test the due-date range wins over payment and ledger ranges."""
        filters = MovementFilters(
            due_date_end="2024-03-31",
            payment_date_start="2024-01-01",
            ledger_date_start="2024-01-01",
        )
        assert self.policy.order_for(filters).field == MovementSortField.DUE_DATE

    def test_payment_before_ledger(self):
        """Test the payment range wins over the ledger range."""
        filters = MovementFilters(payment_date_end="2024-01-31", ledger_date_start="2024-01-01")
        assert self.policy.order_for(filters).field == MovementSortField.PAYMENT_DATE

    def test_fallback_without_dates(self):
        """Test non-date filters fall back to due date."""
        filters = MovementFilters(status="EM ATRASO", name="ACME", contract_number="CT-1")
        assert self.policy.order_for(filters).field == MovementSortField.DUE_DATE

    def test_empty_strings_are_inactive(self):
        """Test blank filter values do not count as set."""
        filters = MovementFilters(status="", payment_date_start="", name="")
        assert filters.active_filters() == ()
        assert self.policy.order_for(filters).field == MovementSortField.DUE_DATE

    def test_backend_column_names(self):
        """Test sort fields carry the backend column names."""
        assert MovementSortField.DUE_DATE.value == "data_vencimento"
        assert MovementSortField.PAYMENT_DATE.value == "data_pagamento"
        assert MovementSortField.LEDGER_DATE.value == "data_lancamento"
