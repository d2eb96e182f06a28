"""
Domain models for the contract billing back office.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainEvent,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ValueObject
)

# Value Objects
from .value_objects import (
    ContractNature,
    Operation,
    RoleKind,
    ContractType,
    ClientParty,
    PartnerParty,
    ShareholderParty,
    BilledParty,
    RoleHolder,
    BankAccount,
    billed_party_for,
    same_party
)

# Entities
from .contract import Contract, ContractItem
from .movement import (
    Movement,
    MovementKind,
    MovementStatus,
    MovementTotals,
    ProofFile,
    status_color
)

__all__ = [
    "BaseEntity",
    "AggregateRoot",
    "DomainEvent",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ValueObject",
    "ContractNature",
    "Operation",
    "RoleKind",
    "ContractType",
    "ClientParty",
    "PartnerParty",
    "ShareholderParty",
    "BilledParty",
    "RoleHolder",
    "BankAccount",
    "billed_party_for",
    "same_party",
    "Contract",
    "ContractItem",
    "Movement",
    "MovementKind",
    "MovementStatus",
    "MovementTotals",
    "ProofFile",
    "status_color",
]
