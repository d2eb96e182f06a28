"""
Infrastructure repositories module.
REST implementations of the domain repository interfaces.
"""

from .contract_repository import HttpContractRepository, build_contract_query_params
from .movement_repository import HttpMovementRepository, build_movement_query_params
from .reference_data_repository import HttpReferenceDataRepository

__all__ = [
    "HttpContractRepository",
    "HttpMovementRepository",
    "HttpReferenceDataRepository",
    "build_contract_query_params",
    "build_movement_query_params",
]
