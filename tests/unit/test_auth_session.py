"""Unit tests for request-scoped auth sessions."""

import base64
import json

import pytest

from listings.models import ErrorCode, ListingError
from listings.services.auth_session import AuthSession

OWNER_ID = "a1b2c3d4-e5f6-7890-abcd-ef1234567890"


def make_token(claims: dict) -> str:
    """Unsigned JWT carrying ``claims``."""

    def encode(part: dict) -> str:
        raw = json.dumps(part).encode()
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")

    return f"{encode({'alg': 'RS256', 'typ': 'JWT'})}.{encode(claims)}.signature"


class TestFromHeaders:
    """Tests for AuthSession.from_headers."""

    def test_user_sub_header(self) -> None:
        session = AuthSession.from_headers(
            {"X-User-Sub": f" {OWNER_ID} ", "X-User-Email": "owner@example.com"}
        )

        assert session.is_authenticated
        assert session.get_user_id() == OWNER_ID
        assert session.get_session().email == "owner@example.com"

    def test_bearer_token(self) -> None:
        token = make_token({"sub": OWNER_ID, "email": "owner@example.com"})

        session = AuthSession.from_headers(
            {"Authorization": f"Bearer {token}"}, trust_bearer=True
        )

        user = session.require_session()
        assert user.user_id == OWNER_ID
        assert user.email == "owner@example.com"
        assert user.claims["sub"] == OWNER_ID

    def test_bearer_token_ignored_unless_trusted(self) -> None:
        """An unverified token alone does not sign anyone in by default."""
        token = make_token({"sub": OWNER_ID})

        session = AuthSession.from_headers({"Authorization": f"Bearer {token}"})

        assert not session.is_authenticated

    def test_user_sub_takes_precedence(self) -> None:
        token = make_token({"sub": "someone-else"})

        session = AuthSession.from_headers(
            {"x-user-sub": OWNER_ID, "authorization": f"Bearer {token}"}, trust_bearer=True
        )

        assert session.get_user_id() == OWNER_ID

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"x-user-sub": "   "},
            {"authorization": "Basic dXNlcjpwYXNz"},
            {"authorization": "Bearer "},
            {"authorization": "Bearer not-a-jwt"},
        ],
    )
    def test_anonymous(self, headers: dict[str, str]) -> None:
        session = AuthSession.from_headers(headers, trust_bearer=True)

        assert not session.is_authenticated
        assert session.get_session() is None
        assert session.get_user_id() is None

    def test_token_without_sub(self) -> None:
        token = make_token({"email": "owner@example.com"})

        session = AuthSession.from_headers(
            {"authorization": f"Bearer {token}"}, trust_bearer=True
        )

        assert not session.is_authenticated


class TestGuards:
    """Tests for require_session and require_no_session."""

    def test_require_session_anonymous(self) -> None:
        with pytest.raises(ListingError) as exc_info:
            AuthSession.anonymous().require_session()

        assert exc_info.value.code == ErrorCode.AUTH_REQUIRED
        assert exc_info.value.message == "You must be logged in to perform this action"

    def test_require_no_session_signed_in(self) -> None:
        with pytest.raises(ListingError) as exc_info:
            AuthSession.for_user(OWNER_ID).require_no_session()

        assert exc_info.value.code == ErrorCode.ALREADY_AUTHENTICATED

    def test_require_no_session_anonymous(self) -> None:
        AuthSession.anonymous().require_no_session()
