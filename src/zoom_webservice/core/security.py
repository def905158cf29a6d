"""JWT signing and random credential generation.

Provides the security primitives the request executor uses to
authenticate every call against the Zoom API.
"""

from __future__ import annotations

import base64
import secrets

from jose import jwt

# Zoom rejects tokens with long lifetimes; keep them just above call latency.
TOKEN_TTL_SECONDS = 40
TOKEN_ALGORITHM = "HS256"


# ── JWT Token Creation ────────────────────────────────────────────────────────


def sign_token(key: str, secret: str, now: int) -> str:
    """Create a signed JWT asserting the API key as issuer.

    The token is never cached: its expiry is ``now + TOKEN_TTL_SECONDS`` so
    it has to be rebuilt for every request.

    Args:
        key: Zoom API key, used as the ``iss`` claim.
        secret: Zoom API secret, used as the HMAC signing key.
        now: Current time as epoch seconds.

    Returns:
        The compact ``header.claims.signature`` token string.
    """
    claims = {
        "iss": key,
        "exp": int(now) + TOKEN_TTL_SECONDS,
    }
    return jwt.encode(claims, secret, algorithm=TOKEN_ALGORITHM)


# ── Password Generation ───────────────────────────────────────────────────────


def generate_password() -> str:
    """Random password for autocreated users (base64 of 16 random bytes)."""
    return base64.b64encode(secrets.token_bytes(16)).decode("ascii")
