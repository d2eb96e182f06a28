"""
Back-office console core for contract billing and movement reconciliation.
"""

__version__ = "1.0.0"
