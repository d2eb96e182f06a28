"""
Settle dialog state for one movement.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from backoffice.application.use_cases.movement_use_cases import SettleMovementRequest
from backoffice.domain.models.base import BusinessRuleViolation
from backoffice.domain.models.movement import Movement, ProofFile


class SettlementForm:
    """
    Pre-filled from the movement: a settled movement shows its payment date
    and effective amount (falling back to the face amount); an open one
    starts blank.
    """

    def __init__(self, movement: Movement, proof_validator=None, today: Optional[date] = None):
        self.movement = movement
        self.proof_validator = proof_validator
        self.today = today
        self.settled = movement.settled
        self.proof: Optional[ProofFile] = None
        if movement.settled:
            self.payment_date = movement.payment_date
            self.effective_amount = movement.effective_amount or movement.face_amount
        else:
            self.payment_date = None
            self.effective_amount = Decimal("0.00")

    def set_settled(self, settled: bool) -> None:
        """Checking fills today's date and the face amount; unchecking clears both."""
        self.settled = settled
        if settled:
            self.payment_date = self.payment_date or self.today or date.today()
            if not self.effective_amount:
                self.effective_amount = self.movement.face_amount
        else:
            self.payment_date = None
            self.effective_amount = Decimal("0.00")
            self.proof = None

    def attach(self, proof: ProofFile) -> None:
        """Proof upload is offered once the movement is marked settled."""
        if not self.settled:
            raise BusinessRuleViolation("Mark the movement as settled before attaching a proof")
        if self.proof_validator is not None:
            self.proof_validator.validate(proof)
        self.proof = proof

    def to_request(self) -> SettleMovementRequest:
        return SettleMovementRequest(
            movement=self.movement,
            settled=self.settled,
            payment_date=self.payment_date if self.settled else None,
            effective_amount=self.effective_amount if self.settled else Decimal("0.00"),
            proof=self.proof,
        )
