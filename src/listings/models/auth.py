"""Authentication models: the resolved user session and Cognito results."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserSession(BaseModel):
    """Identity of the caller for one request."""

    model_config = ConfigDict(strict=True)

    user_id: str
    email: Optional[str] = None
    claims: dict[str, Any] = Field(default_factory=dict)


class SignUpResult(BaseModel):
    """Result of registering a new account."""

    model_config = ConfigDict(strict=True)

    user_sub: str
    confirmed: bool
    delivery_destination: Optional[str] = None


class AuthTokens(BaseModel):
    """Tokens returned after a successful sign-in."""

    model_config = ConfigDict(strict=True)

    access_token: str
    id_token: str
    refresh_token: Optional[str] = None
    expires_in: int
    token_type: str = "Bearer"
