"""Request-scoped authentication session.

API Gateway validates the Cognito JWT before a request reaches the service
and forwards the caller's ``sub`` in the ``x-user-sub`` header.

A ``Bearer`` token's ``sub`` claim is read without signature verification,
so it is only honoured when ``trust_bearer`` is set. Enable that for local
development, or when an API Gateway JWT authorizer has already checked the
token; otherwise anyone could claim any user id.
"""

from collections.abc import Mapping

from listings.models import ErrorCode, ListingError, UserSession
from listings.utils.jwt import decode_jwt_payload

USER_SUB_HEADER = "x-user-sub"
USER_EMAIL_HEADER = "x-user-email"


class AuthSession:
    """Resolved identity of the caller, or an anonymous session."""

    def __init__(self, session: UserSession | None = None) -> None:
        self._session = session

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls(None)

    @classmethod
    def for_user(cls, user_id: str, email: str | None = None) -> "AuthSession":
        return cls(UserSession(user_id=user_id, email=email))

    @classmethod
    def from_headers(
        cls, headers: Mapping[str, str], trust_bearer: bool = False
    ) -> "AuthSession":
        """Build a session from request headers.

        ``x-user-sub`` takes precedence over the Authorization header.

        Args:
            headers: Request headers (any key casing)
            trust_bearer: Accept the unverified ``sub`` of a Bearer token

        Returns:
            An authenticated session, or an anonymous one when no identity
            can be resolved.
        """
        lowered = {key.lower(): value for key, value in headers.items()}

        user_sub = (lowered.get(USER_SUB_HEADER) or "").strip()
        if user_sub:
            return cls.for_user(user_sub, lowered.get(USER_EMAIL_HEADER))

        if not trust_bearer:
            return cls.anonymous()

        authorization = lowered.get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return cls.anonymous()

        claims = decode_jwt_payload(token.strip())
        if not claims or not claims.get("sub"):
            return cls.anonymous()

        email = claims.get("email")
        return cls(
            UserSession(
                user_id=str(claims["sub"]),
                email=str(email) if email else None,
                claims=claims,
            )
        )

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def get_session(self) -> UserSession | None:
        return self._session

    def get_user_id(self) -> str | None:
        return self._session.user_id if self._session else None

    def require_session(self) -> UserSession:
        """Return the session, or fail for anonymous callers.

        Raises:
            ListingError: AUTH_REQUIRED when no user is signed in
        """
        if self._session is None:
            raise ListingError(ErrorCode.AUTH_REQUIRED)
        return self._session

    def require_no_session(self) -> None:
        """Fail when a user is already signed in (sign-up and login pages).

        Raises:
            ListingError: ALREADY_AUTHENTICATED when a user is signed in
        """
        if self._session is not None:
            raise ListingError(ErrorCode.ALREADY_AUTHENTICATED)
