"""Token signing and password generation tests.

Decodes the signed JWTs with python-jose to check claims and signature.
"""

from __future__ import annotations

import base64

import pytest
from jose import JWTError, jwt

from src.zoom_webservice.core.security import (
    TOKEN_ALGORITHM,
    TOKEN_TTL_SECONDS,
    generate_password,
    sign_token,
)

KEY = "api-key"
SECRET = "api-secret"
NOW = 1_700_000_000


def _claims(token: str) -> dict:
    # exp is in the past relative to wall clock time; only the signature matters here.
    return jwt.decode(
        token,
        SECRET,
        algorithms=[TOKEN_ALGORITHM],
        options={"verify_exp": False},
    )


# ── Token Signing Tests ───────────────────────────────────────────────────────


def test_token_has_issuer_and_short_expiry():
    """Token asserts the key as issuer and expires 40 seconds after now."""
    claims = _claims(sign_token(KEY, SECRET, NOW))

    assert claims["iss"] == KEY
    assert claims["exp"] == NOW + TOKEN_TTL_SECONDS
    assert TOKEN_TTL_SECONDS == 40


def test_token_is_compact_three_part_jwt():
    token = sign_token(KEY, SECRET, NOW)

    assert token.count(".") == 2
    header = jwt.get_unverified_header(token)
    assert header["alg"] == "HS256"


def test_tokens_one_second_apart_differ():
    """Two calls one second apart give different tokens, same issuer."""
    first = sign_token(KEY, SECRET, NOW)
    second = sign_token(KEY, SECRET, NOW + 1)

    assert first != second
    first_claims, second_claims = _claims(first), _claims(second)
    assert first_claims["exp"] != second_claims["exp"]
    assert first_claims["iss"] == second_claims["iss"] == KEY


def test_token_rejected_with_wrong_secret():
    token = sign_token(KEY, SECRET, NOW)

    with pytest.raises(JWTError):
        jwt.decode(
            token,
            "not-the-secret",
            algorithms=[TOKEN_ALGORITHM],
            options={"verify_exp": False},
        )


# ── Password Generation Tests ─────────────────────────────────────────────────


def test_generated_password_is_base64_of_16_bytes():
    password = generate_password()

    assert len(base64.b64decode(password)) == 16


def test_generated_passwords_are_random():
    assert generate_password() != generate_password()
