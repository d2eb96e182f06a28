"""
Unit tests for contract change detection.
"""

from datetime import date
from decimal import Decimal

from backoffice.domain.models.contract import Contract, ContractItem
from backoffice.domain.models.value_objects import (
    ClientParty,
    ContractNature,
    ContractType,
    PartnerParty,
)
from backoffice.domain.services.change_detection import ContractChangeDetector


REVENUE = ContractType(id=1, description="Fee", nature=ContractNature.REVENUE)


def item(description="X", amount="100.00", **kwargs) -> ContractItem:
    return ContractItem(
        description=description, amount=Decimal(amount), start_date=date(2024, 1, 1), **kwargs
    )


def persisted_contract(items=None) -> Contract:
    return Contract(
        id=42,
        contract_number="CT-001",
        billed_party=ClientParty(role_id=10, name="ACME"),
        contract_type=REVENUE,
        description="Consulting",
        items=items if items is not None else [item("X")],
    )


class TestContractChangeDetector:
    """Test cases for ContractChangeDetector."""

    def setup_method(self):
        """Set up test fixtures."""
        self.detector = ContractChangeDetector()

    def test_new_contract_sends_everything(self):
        """Test a never persisted contract yields the full state."""
        contract = Contract(description="New", billed_party=ClientParty(role_id=1), items=[item()])

        changes = self.detector.detect(None, contract)

        assert changes.is_new is True
        assert set(changes.fields) == {
            "contract_number", "billed_party", "contract_type_id", "description",
            "amount", "active", "contract_url",
        }
        assert changes.items == contract.items

    def test_unchanged_scalars_are_omitted(self):
        """Test only scalar fields that differ are reported."""
        original = persisted_contract()
        edited = original.snapshot()
        edited.description = "Consulting 2024"

        changes = self.detector.detect(original, edited)

        assert changes.fields == {"description": "Consulting 2024"}

    def test_billed_party_change(self):
        """Test switching the billed party is reported as a single field."""
        original = persisted_contract()
        edited = original.snapshot()
        edited.bill_to(PartnerParty(role_id=10))

        changes = self.detector.detect(original, edited)

        assert changes.fields == {"billed_party": PartnerParty(role_id=10)}

    def test_party_display_data_is_not_a_change(self):
        """Test a party with the same kind and id but another name is unchanged."""
        original = persisted_contract()
        edited = original.snapshot()
        edited.bill_to(ClientParty(role_id=10, name="ACME Ltda"))

        assert "billed_party" not in self.detector.detect(original, edited).fields

    def test_added_item_sends_full_list(self):
        """Test adding Y to [X] sends [Y, X] in full, never Y alone."""
        original = persisted_contract([item("X")])
        edited = original.snapshot()
        edited.add_item(date(2024, 2, 1))
        edited.update_item(0, description="Y", amount=Decimal("5.00"))

        changes = self.detector.detect(original, edited)

        assert changes.items_changed is True
        assert [i.description for i in changes.items] == ["Y", "X"]
        assert changes.fields == {"amount": Decimal("105.00")}

    def test_single_field_change_sends_all_items(self):
        """Test a change in one item of many sends every item."""
        original = persisted_contract([item("A"), item("B"), item("C")])
        edited = original.snapshot()
        edited.update_item(2, late_fee_rate=Decimal("2.00"))

        changes = self.detector.detect(original, edited)

        assert changes.items_changed is True
        assert len(changes.items) == 3

    def test_items_included_even_without_item_changes(self):
        """Test a form that has items always sends them."""
        original = persisted_contract([item("A"), item("B")])
        edited = original.snapshot()
        edited.active = False

        changes = self.detector.detect(original, edited)

        assert changes.items_changed is False
        assert changes.includes_items is True
        assert [i.description for i in changes.items] == ["A", "B"]
        assert changes.fields == {"active": False}

    def test_removing_all_items(self):
        """Test an emptied list is reported as changed and sent empty."""
        original = persisted_contract([item("A")])
        edited = original.snapshot()
        edited.remove_item(0)

        changes = self.detector.detect(original, edited)

        assert changes.items_changed is True
        assert changes.items == []

    def test_no_changes_and_no_items(self):
        """Test a contract without items and without edits is empty."""
        original = persisted_contract([])
        edited = original.snapshot()

        changes = self.detector.detect(original, edited)

        assert changes.is_empty is True
        assert changes.changed_field_names() == []

    def test_items_differ_compares_every_field(self):
        """Test each compared item field counts as a difference."""
        base = item("A")
        variations = [
            dict(description="B"), dict(amount=Decimal("1.00")), dict(start_date=date(2024, 2, 1)),
            dict(end_date=date(2025, 1, 1)), dict(due_day=10), dict(active=False),
            dict(generate_invoice=True), dict(interest_rate=Decimal("1")),
            dict(late_fee_rate=Decimal("2")), dict(bank_instructions="Do not accept after due"),
            dict(bank_account_id=3), dict(due_month=4), dict(due_year=2024),
        ]
        for change in variations:
            assert ContractChangeDetector.items_differ([base], [base.copy(**change)]), change
        assert not ContractChangeDetector.items_differ([base], [base.copy()])
