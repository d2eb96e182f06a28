"""
Unit tests for the session context.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import jwt

from backoffice.infrastructure.auth.session import SessionContext


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_token(**claims) -> str:
    return jwt.encode(claims, "test-secret", algorithm="HS256")


class TestSessionContext:
    """Test cases for SessionContext."""

    def test_auth_headers(self):
        """Test the bearer header follows the stored token."""
        session = SessionContext()
        assert session.auth_headers() == {}

        session.sign_in("abc.def.ghi", {"nome": "Ana"})

        assert session.is_authenticated is True
        assert session.auth_headers() == {"Authorization": "Bearer abc.def.ghi"}
        assert session.user == {"nome": "Ana"}

    def test_unauthorized_clears_and_notifies(self):
        """Test rejected credentials are cleared before listeners run."""
        session = SessionContext(login_path="/entrar", token="t")
        seen = []
        listener = Mock(side_effect=lambda path: seen.append((path, session.token)))
        session.on_unauthorized(listener)

        session.handle_unauthorized()

        assert session.is_authenticated is False
        assert seen == [("/entrar", None)]

    def test_unsubscribe(self):
        """Test an unsubscribed listener is no longer called."""
        session = SessionContext(token="t")
        listener = Mock()
        unsubscribe = session.on_unauthorized(listener)

        unsubscribe()
        session.handle_unauthorized()

        listener.assert_not_called()

    def test_claims_are_read_without_verification(self):
        """Test claims decode without knowing the signing key."""
        token = make_token(email="ana@example.com", entidadeId=4,
                           exp=int((NOW + timedelta(hours=1)).timestamp()))
        session = SessionContext(token=token)

        assert session.email == "ana@example.com"
        assert session.entity_id == 4
        assert session.is_expired(NOW) is False
        assert session.is_expired(NOW + timedelta(hours=2)) is True

    def test_unreadable_token(self):
        """Test a malformed token yields no claims and counts as expired."""
        session = SessionContext(token="not-a-jwt")

        assert session.claims() is None
        assert session.entity_id is None
        assert session.is_expired(NOW) is True

    def test_token_without_exp_is_expired(self):
        """Test a token without expiry is treated as expired."""
        session = SessionContext(token=make_token(email="ana@example.com"))
        assert session.is_expired(NOW) is True
