"""
Local validation performed before anything reaches the backend.
"""

from .validators import ProofFileRejected, ProofFileValidator

__all__ = ["ProofFileRejected", "ProofFileValidator"]
