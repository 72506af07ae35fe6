"""Account service for Cognito email/password accounts.

Handles:
- Sign-up with email, password and display name
- Sign-in with USER_PASSWORD_AUTH, returning Cognito tokens
- Password reset request and confirmation
"""

from typing import Optional

import boto3
from botocore.exceptions import ClientError

from listings.models import AuthTokens, ErrorCode, ListingError, SignUpResult
from listings.utils.logging import get_logger

logger = get_logger(__name__)

# Cognito errors that mean the caller sent bad credentials
_CREDENTIAL_ERRORS = frozenset({"NotAuthorizedException", "UserNotFoundException"})

# Cognito errors that are the caller's fault and safe to report back
_REQUEST_ERRORS = frozenset(
    {
        "UsernameExistsException",
        "InvalidPasswordException",
        "InvalidParameterException",
        "UserNotConfirmedException",
        "CodeMismatchException",
        "ExpiredCodeException",
        "LimitExceededException",
        "TooManyRequestsException",
    }
)


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


class AccountService:
    """Service for Cognito email/password account operations."""

    def __init__(self, user_pool_id: str, client_id: str, region: Optional[str] = None) -> None:
        """Initialize account service with Cognito configuration.

        Args:
            user_pool_id: Cognito User Pool ID (e.g., 'eu-west-1_ABC123')
            client_id: Cognito App Client ID (must allow USER_PASSWORD_AUTH)
            region: AWS region. Defaults to the boto3 configuration.
        """
        self.user_pool_id = user_pool_id
        self.client_id = client_id
        self._cognito_client = boto3.client("cognito-idp", region_name=region)

    def _request_failed(self, e: ClientError, operation: str) -> ListingError:
        code = _error_code(e)
        logger.warning("Cognito %s failed: %s", operation, code)
        return ListingError(ErrorCode.ACCOUNT_REQUEST_FAILED, details={"reason": code})

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> SignUpResult:
        """Register a new account.

        Args:
            email: Email address, used as the username
            password: Password checked against the pool's password policy
            full_name: Optional display name stored as the ``name`` attribute

        Returns:
            SignUpResult with the new user's sub and confirmation state

        Raises:
            ListingError: ACCOUNT_REQUEST_FAILED for rejected sign-ups
            ClientError: For other Cognito failures
        """
        attributes = [{"Name": "email", "Value": email}]
        if full_name:
            attributes.append({"Name": "name", "Value": full_name})

        try:
            response = self._cognito_client.sign_up(
                ClientId=self.client_id,
                Username=email,
                Password=password,
                UserAttributes=attributes,
            )
        except ClientError as e:
            if _error_code(e) in _REQUEST_ERRORS:
                raise self._request_failed(e, "sign_up") from e
            raise

        delivery = response.get("CodeDeliveryDetails") or {}
        return SignUpResult(
            user_sub=response["UserSub"],
            confirmed=bool(response.get("UserConfirmed", False)),
            delivery_destination=delivery.get("Destination"),
        )

    def sign_in(self, email: str, password: str) -> AuthTokens:
        """Authenticate with email and password.

        Raises:
            ListingError: INVALID_CREDENTIALS for a wrong email/password,
                ACCOUNT_REQUEST_FAILED when Cognito cannot complete sign-in
                (unconfirmed user, pending challenge)
            ClientError: For other Cognito failures
        """
        try:
            response = self._cognito_client.initiate_auth(
                AuthFlow="USER_PASSWORD_AUTH",
                ClientId=self.client_id,
                AuthParameters={"USERNAME": email, "PASSWORD": password},
            )
        except ClientError as e:
            code = _error_code(e)
            if code in _CREDENTIAL_ERRORS:
                logger.info("Sign-in rejected: %s", code)
                raise ListingError(ErrorCode.INVALID_CREDENTIALS) from e
            if code in _REQUEST_ERRORS:
                raise self._request_failed(e, "sign_in") from e
            raise

        result = response.get("AuthenticationResult")
        if not result:
            # e.g. NEW_PASSWORD_REQUIRED for admin-created users
            challenge = response.get("ChallengeName", "unknown")
            raise ListingError(
                ErrorCode.ACCOUNT_REQUEST_FAILED,
                details={"reason": f"challenge:{challenge}"},
            )

        return AuthTokens(
            access_token=result["AccessToken"],
            id_token=result["IdToken"],
            refresh_token=result.get("RefreshToken"),
            expires_in=int(result.get("ExpiresIn", 3600)),
            token_type=result.get("TokenType", "Bearer"),
        )

    def request_password_reset(self, email: str) -> Optional[str]:
        """Send a password reset code.

        Unknown emails are not reported, so the response does not reveal
        whether an account exists.

        Returns:
            Masked delivery destination, or None if nothing was sent
        """
        try:
            response = self._cognito_client.forgot_password(
                ClientId=self.client_id,
                Username=email,
            )
        except ClientError as e:
            code = _error_code(e)
            if code == "UserNotFoundException":
                return None
            if code in _REQUEST_ERRORS:
                raise self._request_failed(e, "forgot_password") from e
            raise

        delivery = response.get("CodeDeliveryDetails") or {}
        destination: Optional[str] = delivery.get("Destination")
        return destination

    def confirm_password_reset(self, email: str, code: str, new_password: str) -> None:
        """Set a new password using the emailed reset code.

        Raises:
            ListingError: ACCOUNT_REQUEST_FAILED for a wrong/expired code or
                a password that fails the policy
            ClientError: For other Cognito failures
        """
        try:
            self._cognito_client.confirm_forgot_password(
                ClientId=self.client_id,
                Username=email,
                ConfirmationCode=code,
                Password=new_password,
            )
        except ClientError as e:
            if _error_code(e) in _REQUEST_ERRORS | {"UserNotFoundException"}:
                raise self._request_failed(e, "confirm_forgot_password") from e
            raise
