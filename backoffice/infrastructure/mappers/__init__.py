"""
Infrastructure mappers module.
Converts between domain entities and backend wire DTOs.
"""

from .contract_mapper import ContractMapper
from .movement_mapper import MovementMapper

__all__ = [
    "ContractMapper",
    "MovementMapper",
]
