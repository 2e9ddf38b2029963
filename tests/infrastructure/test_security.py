from datetime import timedelta

import pytest

from app.infrastructure.security import create_access_token, decode_access_token


def test_access_token_carries_identity_claims():
    token = create_access_token(user_id=12, username="alice", role="admin")

    claims = decode_access_token(token)

    assert claims["sub"] == "12"
    assert claims["username"] == "alice"
    assert claims["role"] == "admin"


def test_expired_token_is_rejected():
    token = create_access_token(
        user_id=1, username="alice", role="user", expires_delta=timedelta(seconds=-5)
    )

    with pytest.raises(ValueError):
        decode_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token(user_id=1, username="alice", role="user")

    with pytest.raises(ValueError):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))
