"""
Application layer use cases.
"""

from .base_use_case import *
from .contract_use_cases import *
from .movement_use_cases import *

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    # Contract Use Cases
    "SaveContractRequest",
    "SaveContractUseCase",
    "DeleteContractUseCase",
    "GetContractUseCase",
    "ListContractsRequest",
    "ListContractsUseCase",
    "ContractStatusFilter",
    "filter_contracts",
    # Movement Use Cases
    "ListMovementsRequest",
    "ListMovementsUseCase",
    "MovementListing",
    "ListMovementStatusesUseCase",
    "SettleMovementRequest",
    "SettleMovementUseCase",
    "ProofUploadFailed",
    "DownloadProofUseCase",
    "ProofDownload",
    "GenerateMovementsRequest",
    "GenerateMovementsUseCase",
]
