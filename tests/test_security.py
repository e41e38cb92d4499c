"""Tests for password hashing and access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from dish_calories.domain.errors import InvalidTokenError
from dish_calories.domain.models import UserRecord
from dish_calories.services.security import (
    TokenService,
    hash_password,
    verify_password,
)


def _user() -> UserRecord:
    return UserRecord(
        id=uuid4(),
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        password_hash="unused",
        created_at=datetime.now(tz=UTC),
    )


def test_hash_and_verify_password() -> None:
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not verify_password("s3cret-pass", "not-a-hash")


def test_token_roundtrip_contains_claims() -> None:
    service = TokenService(secret="secret")
    user = _user()

    claims = service.decode(service.issue(user))

    assert claims["sub"] == str(user.id)
    assert claims["email"] == "ada@example.com"


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = TokenService(secret="one").issue(_user())

    with pytest.raises(InvalidTokenError):
        TokenService(secret="two").decode(token)


def test_tampered_token_is_rejected() -> None:
    service = TokenService(secret="secret")
    header, payload, signature = service.issue(_user()).split(".")
    forged = TokenService(secret="secret")._encode({"sub": "someone", "exp": 1})
    forged_payload = forged.split(".")[1]

    with pytest.raises(InvalidTokenError):
        service.decode(f"{header}.{forged_payload}.{signature}")


def test_expired_token_is_rejected() -> None:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    issuer = TokenService(secret="secret", ttl_seconds=60, clock=lambda: now)
    token = issuer.issue(_user())
    later = TokenService(
        secret="secret", clock=lambda: now + timedelta(seconds=61)
    )

    with pytest.raises(InvalidTokenError):
        later.decode(token)


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "é.é.é"])
def test_malformed_tokens_are_rejected(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        TokenService(secret="secret").decode(token)
