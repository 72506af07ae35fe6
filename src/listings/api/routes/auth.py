"""Account endpoints backed by Cognito.

Provides REST endpoints for:
- Sign-up and login (only for callers who are not signed in)
- Password reset request and confirmation (public)
- Current session lookup

API Gateway validates the JWT on protected routes and passes the user's
identity via the x-user-sub header.
"""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from listings.api.dependencies import (
    get_account_service,
    get_auth_session,
    require_anonymous,
)
from listings.api.models.auth import (
    LoginRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    SessionResponse,
    SignUpRequest,
)
from listings.api.models.common import SuccessMessage
from listings.models import AuthTokens, SignUpResult
from listings.services.auth_service import AccountService
from listings.services.auth_session import AuthSession

router = APIRouter(prefix="/auth", tags=["auth"])

# Same reply whether or not the email has an account
RESET_REQUESTED_MESSAGE = "If an account exists for this email, a reset code has been sent"


@router.post(
    "/signup",
    summary="Create an account",
    description="""
Register a new owner account with email and password.

**Only for signed-out callers** - returns 403 when a session is present.

Cognito sends a confirmation code to the email address unless the user
pool auto-confirms sign-ups.
""",
    response_model=SignUpResult,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Account created"},
        400: {"description": "Email already registered or password rejected"},
        403: {"description": "Already signed in"},
    },
)
async def sign_up(
    body: SignUpRequest,
    _: None = Depends(require_anonymous),
    accounts: AccountService = Depends(get_account_service),
) -> SignUpResult:
    return accounts.sign_up(body.email, body.password, body.full_name)


@router.post(
    "/login",
    summary="Sign in",
    description="""
Exchange email and password for Cognito tokens.

**Only for signed-out callers** - returns 403 when a session is present.
""",
    response_model=AuthTokens,
    responses={
        200: {"description": "Signed in"},
        401: {"description": "Invalid email or password"},
        403: {"description": "Already signed in"},
    },
)
async def login(
    body: LoginRequest,
    _: None = Depends(require_anonymous),
    accounts: AccountService = Depends(get_account_service),
) -> AuthTokens:
    return accounts.sign_in(body.email, body.password)


@router.post(
    "/password-reset",
    summary="Request a password reset code",
    response_model=SuccessMessage,
)
async def request_password_reset(
    body: PasswordResetRequest,
    accounts: AccountService = Depends(get_account_service),
) -> SuccessMessage:
    accounts.request_password_reset(body.email)
    return SuccessMessage(message=RESET_REQUESTED_MESSAGE)


@router.post(
    "/password-reset/confirm",
    summary="Set a new password",
    description="""
Set a new password using the code from the reset email.
""",
    response_model=SuccessMessage,
    responses={
        200: {"description": "Password changed"},
        400: {"description": "Wrong or expired code, or password rejected"},
    },
)
async def confirm_password_reset(
    body: PasswordResetConfirmRequest,
    accounts: AccountService = Depends(get_account_service),
) -> SuccessMessage:
    accounts.confirm_password_reset(body.email, body.code, body.new_password)
    return SuccessMessage(message="Password updated. You can now log in")


@router.get(
    "/session",
    summary="Current session",
    response_model=SessionResponse,
)
async def get_session(auth: AuthSession = Depends(get_auth_session)) -> SessionResponse:
    session = auth.get_session()
    if session is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user_id=session.user_id, email=session.email)
