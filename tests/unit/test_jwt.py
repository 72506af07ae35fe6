"""Unit tests for JWT payload decoding."""

import base64
import json

from listings.utils.jwt import decode_jwt_payload


def make_token(payload: object) -> str:
    body = base64.urlsafe_b64encode(json.dumps(payload).encode()).decode().rstrip("=")
    return f"eyJhbGciOiJSUzI1NiJ9.{body}.sig"


class TestDecodeJwtPayload:
    def test_decodes_unpadded_payload(self) -> None:
        payload = decode_jwt_payload(make_token({"sub": "user-1", "email": "a@b.co"}))
        assert payload == {"sub": "user-1", "email": "a@b.co"}

    def test_none_and_empty(self) -> None:
        assert decode_jwt_payload(None) is None
        assert decode_jwt_payload("") is None

    def test_wrong_number_of_parts(self) -> None:
        assert decode_jwt_payload("a.b") is None

    def test_payload_not_json(self) -> None:
        body = base64.urlsafe_b64encode(b"not json").decode()
        assert decode_jwt_payload(f"h.{body}.s") is None

    def test_payload_not_object(self) -> None:
        assert decode_jwt_payload(make_token(["sub"])) is None
