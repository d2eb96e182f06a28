"""
In-memory state of the editing dialogs.
"""

from .contract_form import ContractForm, reindex_after_removal, shift_for_prepend
from .settlement_form import SettlementForm

__all__ = ["ContractForm", "SettlementForm", "reindex_after_removal", "shift_for_prepend"]
