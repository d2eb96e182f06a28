"""
Session context for the back-office console.
Holds the bearer token and the signed-in user, and notifies observers when
the backend rejects the credentials.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import jwt


logger = logging.getLogger(__name__)

UnauthorizedListener = Callable[[str], None]


class SessionContext:
    """
    Explicitly constructed session, injected into the API client.

    Listeners registered with ``on_unauthorized`` are called with the login
    path after the credentials have been cleared.
    """

    def __init__(self, login_path: str = "/login", token: Optional[str] = None,
                 user: Optional[Dict[str, Any]] = None):
        self.login_path = login_path
        self._token = token
        self._user = user
        self._listeners: List[UnauthorizedListener] = []

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def sign_in(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        """Store credentials returned by the login endpoint."""
        self._token = token
        self._user = user

    def clear(self) -> None:
        self._token = None
        self._user = None

    def on_unauthorized(self, listener: UnauthorizedListener) -> Callable[[], None]:
        """
        Register a listener for rejected credentials.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def handle_unauthorized(self) -> None:
        """Clear credentials, then tell every listener to go to the login entry point."""
        logger.warning("Backend rejected the session credentials; signing out")
        self.clear()
        for listener in list(self._listeners):
            listener(self.login_path)

    def auth_headers(self) -> Dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def claims(self) -> Optional[Dict[str, Any]]:
        """
        Decode the token payload without verifying its signature.

        The backend verifies the token; the console only reads claims such
        as ``exp`` and ``entidadeId``.

        Returns:
            Dict with the token claims, or None when there is no readable token
        """
        if not self._token:
            return None
        try:
            return jwt.decode(self._token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            logger.warning(f"Unreadable session token: {str(e)}")
            return None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        claims = self.claims()
        if not claims or "exp" not in claims:
            return True
        now = now or datetime.now(timezone.utc)
        return claims["exp"] < now.timestamp()

    @property
    def email(self) -> Optional[str]:
        claims = self.claims() or {}
        return claims.get("email")

    @property
    def entity_id(self) -> Optional[int]:
        claims = self.claims() or {}
        return claims.get("entidadeId")
