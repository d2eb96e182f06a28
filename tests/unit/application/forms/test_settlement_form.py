"""
Unit tests for the settle dialog state.
"""

import pytest
from datetime import date
from decimal import Decimal

from backoffice.application.forms.settlement_form import SettlementForm
from backoffice.config import Settings
from backoffice.domain.models.base import BusinessRuleViolation
from backoffice.domain.models.movement import Movement, MovementKind, ProofFile
from backoffice.infrastructure.validation.validators import ProofFileRejected, ProofFileValidator


TODAY = date(2024, 6, 3)


def open_movement() -> Movement:
    return Movement(id=5, kind=MovementKind.PAYABLE, due_date=date(2024, 6, 1), face_amount=Decimal("90.00"))


class TestSettlementForm:
    """Test cases for SettlementForm."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = ProofFileValidator(Settings())

    def test_open_movement_starts_blank(self):
        """Test an open movement has no payment prefilled."""
        form = SettlementForm(open_movement(), self.validator, TODAY)

        assert form.settled is False
        assert form.payment_date is None
        assert form.effective_amount == Decimal("0.00")

    def test_settled_movement_is_prefilled(self):
        """Test a settled movement shows its recorded payment."""
        movement = Movement(
            id=5, due_date=date(2024, 6, 1), face_amount=Decimal("90.00"),
            settled=True, payment_date=date(2024, 6, 2),
        )

        form = SettlementForm(movement, self.validator, TODAY)

        assert form.payment_date == date(2024, 6, 2)
        assert form.effective_amount == Decimal("90.00")

    def test_checking_settled_fills_defaults(self):
        """Test marking as settled fills today and the face amount."""
        form = SettlementForm(open_movement(), self.validator, TODAY)

        form.set_settled(True)

        assert form.payment_date == TODAY
        assert form.effective_amount == Decimal("90.00")

    def test_unchecking_clears(self):
        """Test unmarking clears the payment and the proof."""
        form = SettlementForm(open_movement(), self.validator, TODAY)
        form.set_settled(True)
        form.attach(ProofFile("receipt.png", b"\x89PNG", "image/png"))

        form.set_settled(False)

        assert form.payment_date is None
        assert form.effective_amount == Decimal("0.00")
        assert form.proof is None

    def test_attach_requires_settled(self):
        """Test a proof can only be attached to a settled movement."""
        form = SettlementForm(open_movement(), self.validator, TODAY)

        with pytest.raises(BusinessRuleViolation):
            form.attach(ProofFile("receipt.pdf", b"%PDF"))

    def test_attach_validates_proof(self):
        """Test invalid proofs are rejected when attached."""
        form = SettlementForm(open_movement(), self.validator, TODAY)
        form.set_settled(True)

        with pytest.raises(ProofFileRejected):
            form.attach(ProofFile("receipt.exe", b"MZ"))

    def test_to_request(self):
        """Test the form becomes a settle request."""
        form = SettlementForm(open_movement(), self.validator, TODAY)
        form.set_settled(True)
        form.effective_amount = Decimal("95.50")

        request = form.to_request()

        assert request.settled is True
        assert request.payment_date == TODAY
        assert request.effective_amount == Decimal("95.50")
        assert request.movement.id == 5
