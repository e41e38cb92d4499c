"""Password hashing and access tokens."""

import base64
import hashlib
import hmac
import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from passlib.context import CryptContext

from dish_calories.domain.errors import InvalidTokenError
from dish_calories.domain.models import UserRecord

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return true when the password matches the stored hash."""
    try:
        return _pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TokenService:
    """Issues and verifies HS256 JWT access tokens."""

    secret: str
    ttl_seconds: int = 7 * 24 * 3600
    clock: Callable[[], datetime] = _utc_now

    def issue(self, user: UserRecord) -> str:
        """Issue a token for the user."""
        now = self.clock()
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return self._encode(payload)

    def decode(self, token: str) -> dict[str, object]:
        """Return the verified claims of a token."""
        parts = token.split(".")
        if len(parts) != 3:  # noqa: PLR2004
            raise InvalidTokenError("Malformed token")
        header_b64, payload_b64, signature_b64 = parts
        try:
            expected = self._sign(f"{header_b64}.{payload_b64}")
            signature = _b64url_decode(signature_b64)
            payload = json.loads(_b64url_decode(payload_b64))
        except ValueError as exc:
            raise InvalidTokenError("Malformed token") from exc
        if not hmac.compare_digest(signature, expected):
            raise InvalidTokenError("Invalid token signature")
        if not isinstance(payload, dict):
            raise InvalidTokenError("Malformed token payload")
        exp = payload.get("exp")
        if not isinstance(exp, int) or exp <= int(self.clock().timestamp()):
            raise InvalidTokenError("Token expired")
        return payload

    def _encode(self, payload: dict[str, object]) -> str:
        header_b64 = _b64url_encode(_compact_json(_JWT_HEADER))
        payload_b64 = _b64url_encode(_compact_json(payload))
        signature = self._sign(f"{header_b64}.{payload_b64}")
        return f"{header_b64}.{payload_b64}.{_b64url_encode(signature)}"

    def _sign(self, signing_input: str) -> bytes:
        return hmac.new(
            self.secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256
        ).digest()


def _compact_json(data: dict[str, object]) -> bytes:
    return json.dumps(data, separators=(",", ":")).encode("utf-8")


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)
