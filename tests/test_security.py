"""Test token issuing/parsing and password hashing."""
from datetime import timedelta

import pytest
from jose import jwt

from app.helpers.time import utcnow
from app.users.security import TOKEN_LIFETIME, TokenCodec, get_password_hash, verify_password


def test_parse_subject_returns_issued_subject(codec):
    """A freshly issued token parses back to its subject."""
    token = codec.issue("house@ppth.org")

    assert codec.parse_subject(token) == "house@ppth.org"


def test_token_expires_after_seven_days(codec):
    """Token lifetime is fixed at seven days."""
    token = codec.issue("root")
    claims = jwt.get_unverified_claims(token)

    assert TOKEN_LIFETIME == timedelta(days=7)
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_expired_token_is_rejected(codec):
    """A token issued more than seven days ago is invalid."""
    token = codec.issue("root", now=utcnow() - timedelta(days=7, minutes=1))

    assert codec.parse_subject(token) is None


def test_token_just_inside_lifetime_is_accepted(codec):
    token = codec.issue("root", now=utcnow() - timedelta(days=6, hours=23))

    assert codec.parse_subject(token) == "root"


def test_token_signed_with_other_secret_is_rejected(codec):
    other = TokenCodec("a-completely-different-secret-value")
    token = other.issue("root")

    assert codec.parse_subject(token) is None


def test_tampered_token_is_rejected(codec):
    header, _payload, signature = codec.issue("root").split(".")
    forged_payload = codec.issue("admin-impostor").split(".")[1]

    assert codec.parse_subject(f"{header}.{forged_payload}.{signature}") is None


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", None])
def test_malformed_token_is_rejected(codec, token):
    assert codec.parse_subject(token) is None


def test_token_without_subject_is_rejected():
    secret = "subject-less-token-secret-value"
    token = jwt.encode({"exp": utcnow() + timedelta(days=1)}, secret, algorithm="HS256")

    assert TokenCodec(secret).parse_subject(token) is None


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenCodec("")


def test_password_hash_round_trip():
    hashed = get_password_hash("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_verify_password_against_unhashed_value_is_false():
    assert not verify_password("secret123", "secret123")
