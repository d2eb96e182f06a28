"""
Repository interfaces for the domain layer.
Ports onto the REST backend; implementations live in infrastructure.
"""

from .contract_repository import ContractRepository, ContractQuery, ContractFilter, ContractPage
from .movement_repository import MovementRepository, MovementPage
from .reference_data_repository import ReferenceDataRepository

__all__ = [
    "ContractRepository",
    "ContractQuery",
    "ContractFilter",
    "ContractPage",
    "MovementRepository",
    "MovementPage",
    "ReferenceDataRepository",
]
