"""
Application layer DTOs.
Wire shapes for the REST backend requests and responses.
"""

from .base_dto import *
from .contract_dto import *
from .movement_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "ResponseDTO",
    "PayloadDTO",
    "PageResponseDTO",
    "total_pages",
    # Contract DTOs
    "ContractTypeDTO",
    "PersonDTO",
    "RoleHolderDTO",
    "BankDTO",
    "BankAccountDTO",
    "ContractItemDTO",
    "ContractResponseDTO",
    "ContractPageDTO",
    "ContractItemPayloadDTO",
    "ContractPayloadDTO",
    # Movement DTOs
    "MovementDTO",
    "MovementTotalsDTO",
    "MovementListResponseDTO",
    "MovementStatusListDTO",
    "SettlementPayloadDTO",
    "ProofUploadPayloadDTO",
    "ProofUploadResponseDTO",
    "MovementGenerationPayloadDTO",
]
