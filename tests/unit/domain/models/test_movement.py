"""
Unit tests for the Movement model and its status classification.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from backoffice.domain.models.base import BusinessRuleViolation, ValidationError
from backoffice.domain.models.movement import (
    Movement,
    MovementKind,
    MovementStatus,
    ProofFile,
    status_color,
)


TODAY = date(2024, 6, 10)


def make_movement(**kwargs) -> Movement:
    defaults = dict(
        id=1,
        kind=MovementKind.RECEIVABLE,
        due_date=TODAY,
        face_amount=Decimal("1000.00"),
    )
    defaults.update(kwargs)
    return Movement(**defaults)


class TestMovementStatus:
    """Test cases for status classification."""

    def test_due_today_is_open(self):
        """Test a movement due today is still open."""
        assert make_movement(due_date=TODAY).status(TODAY) == MovementStatus.OPEN

    def test_due_yesterday_is_overdue(self):
        """Test a movement due yesterday is overdue."""
        movement = make_movement(due_date=TODAY - timedelta(days=1))
        assert movement.status(TODAY) == MovementStatus.OVERDUE

    def test_future_due_is_open(self):
        """Test a movement due in the future is open."""
        assert make_movement(due_date=TODAY + timedelta(days=30)).status(TODAY) == MovementStatus.OPEN

    def test_settled_regardless_of_dates(self):
        """Test settled movements are SETTLED whatever their dates."""
        for due in (TODAY - timedelta(days=90), TODAY, TODAY + timedelta(days=90)):
            movement = make_movement(due_date=due, settled=True, payment_date=TODAY)
            assert movement.status(TODAY) == MovementStatus.SETTLED

    def test_labels_by_kind(self):
        """Test settled labels differ between receivables and payables."""
        assert make_movement(settled=True).status_label(TODAY) == "RECEBIDO"
        assert make_movement(kind=MovementKind.PAYABLE, settled=True).status_label(TODAY) == "PAGO"
        assert make_movement().status_label(TODAY) == "EM ABERTO"
        assert make_movement(due_date=date(2024, 1, 1)).status_label(TODAY) == "EM ATRASO"


class TestStatusColor:
    """Test cases for the fixed colour lookup."""

    @pytest.mark.parametrize("label,color", [
        ("PAGO", "green"),
        ("RECEBIDO", "green"),
        ("EM ABERTO", "blue"),
        ("EM ATRASO", "red"),
        ("CANCELADO", "gray"),
        ("", "gray"),
        (None, "gray"),
    ])
    def test_lookup(self, label, color):
        """Test each label maps to its colour and anything else is neutral."""
        assert status_color(label) == color

    def test_movement_prefers_reported_status(self):
        """Test the backend label drives the colour when present."""
        movement = make_movement(reported_status="EM ATRASO")
        assert movement.status_color(TODAY) == "red"
        assert make_movement().status_color(TODAY) == "blue"


class TestCorrections:
    """Test cases for overdue days and corrected totals."""

    def test_corrected_total_identity(self):
        """Test the corrected total is face plus interest plus late fee."""
        movement = make_movement(
            face_amount=Decimal("1000.00"),
            interest_amount=Decimal("12.34"),
            late_fee_amount=Decimal("20.00"),
        )
        assert movement.corrected_total == Decimal("1032.34")
        assert movement.corrected_total == (
            movement.face_amount + movement.interest_amount + movement.late_fee_amount
        )

    def test_corrected_total_holds_when_settled(self):
        """Test the identity also holds after settlement."""
        movement = make_movement(interest_amount="5.5", late_fee_amount="1.25")
        movement.settle(TODAY, Decimal("1006.75"))
        assert movement.corrected_total == Decimal("1006.75")

    def test_overdue_days_unsettled(self):
        """Test overdue days count up to today and never go negative."""
        assert make_movement(due_date=TODAY - timedelta(days=15)).overdue_days(TODAY) == 15
        assert make_movement(due_date=TODAY).overdue_days(TODAY) == 0
        assert make_movement(due_date=TODAY + timedelta(days=3)).overdue_days(TODAY) == 0

    def test_overdue_days_settled(self):
        """Test settled movements count up to the payment date."""
        movement = make_movement(
            due_date=date(2024, 6, 1), settled=True, payment_date=date(2024, 6, 8)
        )
        assert movement.overdue_days(TODAY) == 7

        early = make_movement(due_date=date(2024, 6, 1), settled=True, payment_date=date(2024, 5, 28))
        assert early.overdue_days(TODAY) == 0


class TestSettlement:
    """Test cases for settling a movement."""

    def test_settle_records_payment(self):
        """Test settling stores the payment date and effective amount."""
        movement = make_movement()

        movement.settle(TODAY, Decimal("990.00"))

        assert movement.settled is True
        assert movement.payment_date == TODAY
        assert movement.effective_amount == Decimal("990.00")
        assert movement.status(TODAY) == MovementStatus.SETTLED
        assert movement.pull_events()[0].event_name == "movement.settled"

    def test_effective_amount_defaults_to_face(self):
        """Test the effective amount falls back to the face amount."""
        movement = make_movement()
        movement.settle(TODAY)
        assert movement.effective_amount == Decimal("1000.00")

    def test_settle_requires_payment_date(self):
        """Test a payment date is mandatory."""
        with pytest.raises(ValidationError, match="Payment date is required"):
            make_movement().settle(None)

    def test_unsettle_not_allowed(self):
        """Test settled movements cannot be reopened."""
        with pytest.raises(BusinessRuleViolation, match="cannot be reopened"):
            make_movement(settled=True).unsettle()

    def test_display_date(self):
        """Test settled rows show the payment date, others the due date."""
        assert make_movement().display_date == TODAY
        settled = make_movement(settled=True, payment_date=date(2024, 6, 12))
        assert settled.display_date == date(2024, 6, 12)


class TestProof:
    """Test cases for payment proofs."""

    def test_attach_proof(self):
        """Test attaching a proof is independent of the settlement flag."""
        movement = make_movement()
        movement.attach_proof("https://files.example.com/comprovantes/abc-123.pdf")

        assert movement.settled is False
        assert movement.proof_identifier == "abc-123"

    def test_no_proof_identifier(self):
        """Test movements without a proof have no identifier."""
        assert make_movement().proof_identifier is None

    def test_proof_file_extension(self):
        """Test extensions are lower-cased and missing ones are empty."""
        assert ProofFile("Receipt.PDF", b"x").extension == "pdf"
        assert ProofFile("receipt", b"x").extension == ""
        assert ProofFile("scan.jpeg", b"abc").size == 3
