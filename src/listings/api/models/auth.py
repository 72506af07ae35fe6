"""API models for account endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    email: str = Field(..., min_length=3, max_length=254, examples=["owner@example.com"])
    password: str = Field(..., min_length=8, max_length=256)
    full_name: Optional[str] = Field(default=None, max_length=100, examples=["Kari Nordmann"])


class LoginRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    email: str = Field(..., min_length=3, max_length=254, examples=["owner@example.com"])
    password: str = Field(..., min_length=1, max_length=256)


class PasswordResetRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    email: str = Field(..., min_length=3, max_length=254, examples=["owner@example.com"])


class PasswordResetConfirmRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    email: str = Field(..., min_length=3, max_length=254)
    code: str = Field(..., min_length=1, max_length=16, examples=["123456"])
    new_password: str = Field(..., min_length=8, max_length=256)


class SessionResponse(BaseModel):
    """The caller's session state."""

    model_config = ConfigDict(strict=True)

    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
