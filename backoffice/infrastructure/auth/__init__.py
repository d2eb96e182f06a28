"""
Authentication infrastructure module.
Holds the session context shared by everything that issues HTTP calls.
"""

from .session import SessionContext, UnauthorizedListener

__all__ = ["SessionContext", "UnauthorizedListener"]
