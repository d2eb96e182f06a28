"""
Unit tests for the Contract aggregate and its items.
"""

import pytest
from datetime import date
from decimal import Decimal

from backoffice.domain.models.base import BusinessRuleViolation, ValidationError
from backoffice.domain.models.contract import Contract, ContractItem
from backoffice.domain.models.value_objects import (
    ClientParty,
    ContractNature,
    ContractType,
    Operation,
    PartnerParty,
    RoleKind,
)


REVENUE_MONTHLY = ContractType(id=1, description="Monthly fee", nature=ContractNature.REVENUE, recurring=True)
REVENUE_ONCE = ContractType(id=2, description="Setup fee", nature=ContractNature.REVENUE, recurring=False)
EXPENSE = ContractType(id=3, description="Rent", nature=ContractNature.EXPENSE, recurring=True)

TODAY = date(2024, 5, 17)


def valid_item(description="Fee", amount="100.00", **kwargs) -> ContractItem:
    return ContractItem(description=description, amount=Decimal(amount), start_date=TODAY, **kwargs)


def valid_contract(**kwargs) -> Contract:
    defaults = dict(
        billed_party=ClientParty(role_id=10, name="ACME"),
        contract_type=REVENUE_ONCE,
        description="Consulting",
        items=[valid_item()],
    )
    defaults.update(kwargs)
    return Contract(**defaults)


class TestContractItem:
    """Test cases for ContractItem."""

    def test_defaults(self):
        """Test a bare item gets sane defaults."""
        item = ContractItem()

        assert item.amount == Decimal("0.00")
        assert item.due_day == 1
        assert item.active is True
        assert item.due_month == 0
        assert item.due_year == 0
        assert item.is_persisted is False

    def test_amount_coerced_to_decimal(self):
        """Test floats and strings become two-place decimals."""
        assert ContractItem(amount=12.5).amount == Decimal("12.50")
        assert ContractItem(amount="1234.567").amount == Decimal("1234.57")

    @pytest.mark.parametrize("due_day", [0, 29, 31])
    def test_due_day_out_of_range(self, due_day):
        """Test due days outside 1..28 are rejected."""
        with pytest.raises(ValidationError, match="Due day must be between 1 and 28"):
            ContractItem(due_day=due_day)

    def test_amount_limit(self):
        """Test amounts above 9,999,999.99 are rejected."""
        with pytest.raises(ValidationError, match="Item amount"):
            ContractItem(amount=Decimal("10000000.00"))

    def test_rates_limited_to_percentages(self):
        """Test interest and late fee rates must stay within 0..100."""
        with pytest.raises(ValidationError, match="Rates must be between 0 and 100"):
            ContractItem(interest_rate=Decimal("100.01"))
        with pytest.raises(ValidationError, match="Rates must be between 0 and 100"):
            ContractItem(late_fee_rate=-1)

    def test_end_date_before_start(self):
        """Test an end date earlier than the start date is rejected."""
        with pytest.raises(ValidationError, match="End date"):
            ContractItem(start_date=TODAY, end_date=date(2024, 1, 1))


class TestContractAmount:
    """Test cases for the derived contract amount."""

    def test_amount_is_sum_of_items(self):
        """Test the amount always equals the item sum across add, edit and remove."""
        contract = valid_contract(items=[valid_item(amount="100.00"), valid_item(amount="50.25")])
        assert contract.amount == Decimal("150.25")

        contract.add_item(TODAY)
        assert contract.amount == sum(item.amount for item in contract.items)

        contract.update_item(0, amount=Decimal("10.10"))
        assert contract.amount == Decimal("160.35")

        contract.remove_item(1)
        assert contract.amount == Decimal("60.35")
        assert contract.amount == sum(item.amount for item in contract.items)

    def test_amount_of_empty_contract(self):
        """Test a contract without items totals zero."""
        assert Contract().amount == Decimal("0.00")


class TestContractItems:
    """Test cases for adding, updating and removing items."""

    def test_add_item_prepends(self):
        """Test new items go to the top of the list."""
        contract = valid_contract(items=[valid_item(description="Existing")])

        added = contract.add_item(TODAY)

        assert contract.items[0] is added
        assert contract.items[1].description == "Existing"
        assert added.start_date == TODAY
        assert added.due_day == 1

    def test_add_item_recurring_sets_due_month(self):
        """Test recurring contract types default due month/year to today."""
        contract = valid_contract(contract_type=REVENUE_MONTHLY)

        added = contract.add_item(TODAY)

        assert added.due_month == 5
        assert added.due_year == 2024

    def test_add_item_non_recurring_zero_due_month(self):
        """Test non-recurring types leave due month/year at zero."""
        contract = valid_contract(contract_type=REVENUE_ONCE)

        added = contract.add_item(TODAY)

        assert added.due_month == 0
        assert added.due_year == 0

    def test_add_item_operation_follows_type(self):
        """Test new items take the operation of the contract type."""
        assert valid_contract(contract_type=REVENUE_ONCE).add_item(TODAY).operation == Operation.CREDIT
        assert valid_contract(contract_type=EXPENSE).add_item(TODAY).operation == Operation.DEBIT

    def test_remove_item_by_position(self):
        """Test removal returns the removed item and keeps the order of the rest."""
        contract = valid_contract(items=[valid_item("A"), valid_item("B"), valid_item("C")])

        removed = contract.remove_item(1)

        assert removed.description == "B"
        assert [item.description for item in contract.items] == ["A", "C"]

    def test_remove_item_out_of_range(self):
        """Test removing a missing position fails."""
        with pytest.raises(ValidationError, match="No item at position 3"):
            valid_contract().remove_item(3)

    def test_update_item_validates(self):
        """Test updates go through item validation."""
        contract = valid_contract()
        with pytest.raises(ValidationError, match="Due day"):
            contract.update_item(0, due_day=30)

    def test_update_item_rejects_operation(self):
        """Test the operation cannot be edited directly."""
        with pytest.raises(BusinessRuleViolation, match="derived from the contract type"):
            valid_contract().update_item(0, operation=Operation.DEBIT)

    def test_update_item_rejects_unknown_fields(self):
        """Test unknown item fields are rejected."""
        with pytest.raises(ValidationError, match="Unknown item fields: colour"):
            valid_contract().update_item(0, colour="red")


class TestContractType:
    """Test cases for changing the contract type."""

    def test_nature_change_recomputes_every_item(self):
        """Test switching from revenue to expense flips all item operations."""
        contract = valid_contract(contract_type=None, items=[valid_item("A"), valid_item("B")])
        contract.set_contract_type(REVENUE_ONCE)
        assert all(item.operation == Operation.CREDIT for item in contract.items)

        contract.set_contract_type(EXPENSE)

        assert contract.contract_type_id == EXPENSE.id
        assert all(item.operation == Operation.DEBIT for item in contract.items)
        assert contract.pull_events()[-1].event_name == "contract.type_changed"

    def test_same_nature_leaves_items_alone(self):
        """Test a type change without a nature change does not recompute."""
        contract = valid_contract(contract_type=REVENUE_ONCE, items=[valid_item(operation=Operation.CREDIT)])
        contract.pull_events()

        contract.set_contract_type(REVENUE_MONTHLY)

        assert contract.contract_type_id == REVENUE_MONTHLY.id
        assert contract.items[0].operation == Operation.CREDIT
        assert contract.pull_events() == []


class TestSubmissionValidation:
    """Test cases for the ordered pre-submission checks."""

    def test_valid_contract_passes(self):
        """Test a complete contract validates."""
        valid_contract().validate_for_submission()

    def test_role_kind_checked_first(self):
        """Test the missing role type is reported before anything else."""
        contract = Contract()
        with pytest.raises(ValidationError, match="Select the billed party type") as exc_info:
            contract.validate_for_submission()
        assert exc_info.value.field == "role_kind"

    def test_role_kind_from_editor_tab(self):
        """Test a selected tab satisfies the role check even before a party is chosen."""
        contract = valid_contract(billed_party=None)
        contract.validate_for_submission(RoleKind.PARTNER)

    def test_order_of_checks(self):
        """Test each check fires in order, first failure wins."""
        contract = Contract(billed_party=PartnerParty(role_id=3))
        with pytest.raises(ValidationError, match="Select the contract type"):
            contract.validate_for_submission()

        contract.set_contract_type(REVENUE_ONCE)
        with pytest.raises(ValidationError, match="Description is required"):
            contract.validate_for_submission()

        contract.description = "   "
        with pytest.raises(ValidationError, match="Description is required"):
            contract.validate_for_submission()

        contract.description = "Retainer"
        with pytest.raises(ValidationError, match="at least one item"):
            contract.validate_for_submission()

        contract.items = [ContractItem(description="", amount=Decimal("0"), start_date=None)]
        with pytest.raises(ValidationError, match="Item description is required"):
            contract.validate_for_submission()

        contract.update_item(0, description="Hours")
        with pytest.raises(ValidationError, match="Item amount must be greater than zero"):
            contract.validate_for_submission()

        contract.update_item(0, amount=Decimal("1.00"))
        with pytest.raises(ValidationError, match="Item start date is required"):
            contract.validate_for_submission()

        contract.update_item(0, start_date=TODAY)
        contract.validate_for_submission()


class TestBilledParty:
    """Test cases for the billed party binding."""

    def test_bill_to_replaces_previous_party(self):
        """Test only one party is ever bound."""
        contract = valid_contract()
        contract.bill_to(PartnerParty(role_id=7))

        assert isinstance(contract.billed_party, PartnerParty)
        assert contract.role_kind == RoleKind.PARTNER

    def test_is_billed_to_ignores_display_data(self):
        """Test party matching uses kind and role id only."""
        contract = valid_contract(billed_party=ClientParty(role_id=10, name="ACME"))

        assert contract.is_billed_to(ClientParty(role_id=10))
        assert not contract.is_billed_to(PartnerParty(role_id=10))

    def test_snapshot_is_detached(self):
        """Test editing a snapshot leaves the original untouched."""
        contract = valid_contract(id=5)
        copy = contract.snapshot()
        copy.update_item(0, description="Changed")
        copy.description = "Other"

        assert contract.items[0].description == "Fee"
        assert contract.description == "Consulting"
        assert copy.id == 5
