"""JWT Token Maker - issuance, verification and uniform rejection.

Tests cover:
    - Round trip keeps subject, username and validity window
    - Expired, forged, tampered and garbage tokens all raise AuthenticationError
    - Short keys are refused at construction
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from tasktracker.core.domain_types import UserId
from tasktracker.core.errors import AuthenticationError
from tasktracker.infrastructure.token_maker import JWTTokenMaker

KEY = "k" * 32


@pytest.fixture
def maker():
    return JWTTokenMaker(KEY)


def test_verify_returns_issued_payload(maker):
    user_id = UserId(uuid4())
    token, issued = maker.create_token(user_id, "ana", timedelta(minutes=1))

    payload = maker.verify_token(token)

    assert payload == issued
    assert payload.user_id == user_id
    assert payload.username == "ana"
    assert payload.expired_at - payload.issued_at == timedelta(minutes=1)


def test_expired_token_is_rejected(maker):
    token, _ = maker.create_token(UserId(uuid4()), "ana", timedelta(minutes=-1))
    with pytest.raises(AuthenticationError) as exc_info:
        maker.verify_token(token)
    assert exc_info.value.reason == "token has expired"
    assert exc_info.value.message == "Authentication required"


def test_token_expiring_this_second_is_rejected(maker, monkeypatch):
    token, _ = maker.create_token(UserId(uuid4()), "ana", timedelta(minutes=1))
    claims = jwt.decode(token, KEY, algorithms=["HS256"])
    claims["exp"] = int(datetime.now(timezone.utc).timestamp())
    monkeypatch.setattr(jwt, "decode", lambda *args, **kwargs: claims)

    with pytest.raises(AuthenticationError) as exc_info:
        maker.verify_token(token)

    assert exc_info.value.reason == "token has expired"


def test_token_signed_with_other_key_is_rejected(maker):
    token, _ = JWTTokenMaker("o" * 32).create_token(
        UserId(uuid4()), "ana", timedelta(minutes=1),
    )
    with pytest.raises(AuthenticationError):
        maker.verify_token(token)


def test_tampered_token_is_rejected(maker):
    token, _ = maker.create_token(UserId(uuid4()), "ana", timedelta(minutes=1))
    header, body, signature = token.split(".")
    tampered = ".".join([header, body, signature[::-1]])
    with pytest.raises(AuthenticationError):
        maker.verify_token(tampered)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(maker, token):
    with pytest.raises(AuthenticationError):
        maker.verify_token(token)


def test_token_without_required_claims_is_rejected(maker):
    token = jwt.encode({"sub": str(uuid4())}, KEY, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        maker.verify_token(token)


def test_token_with_non_uuid_subject_is_rejected(maker):
    token, _ = maker.create_token(UserId(uuid4()), "ana", timedelta(minutes=1))
    claims = jwt.decode(token, KEY, algorithms=["HS256"])
    claims["sub"] = "not-a-uuid"
    forged = jwt.encode(claims, KEY, algorithm="HS256")
    with pytest.raises(AuthenticationError) as exc_info:
        maker.verify_token(forged)
    assert "malformed" in exc_info.value.reason


def test_short_key_is_refused():
    with pytest.raises(ValueError, match="at least 32"):
        JWTTokenMaker("short")
