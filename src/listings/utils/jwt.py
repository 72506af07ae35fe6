"""JWT utility functions for extracting user identity from tokens.

Architecture Note:
- API Gateway validates the JWT signature before the request reaches us
- We decode the JWT payload without signature verification, so callers
  only trust it where that validation has happened (see AuthSession)
- The `sub` claim contains the Cognito user ID, used as the listing owner ID
"""

import base64
import json
from typing import Any

from listings.utils.logging import get_logger

logger = get_logger(__name__)


def decode_jwt_payload(token: str | None) -> dict[str, Any] | None:
    """Decode a JWT token and return the full payload.

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if decoding fails
    """
    if not token:
        return None

    try:
        # JWT format: header.payload.signature
        parts = token.split(".")
        if len(parts) != 3:
            logger.debug("Invalid JWT format: expected 3 parts, got %d", len(parts))
            return None

        payload_b64 = parts[1]

        # base64url requires padding to be multiple of 4
        padding = 4 - len(payload_b64) % 4
        if padding != 4:
            payload_b64 += "=" * padding

        payload_json = base64.urlsafe_b64decode(payload_b64)
        payload = json.loads(payload_json)
        if not isinstance(payload, dict):
            return None
        return payload

    except (ValueError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Failed to decode JWT payload: %s", type(e).__name__)
        return None
