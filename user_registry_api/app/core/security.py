"""
Security helpers for password hashing and token issuance.

Passwords are hashed with bcrypt (auto‑salted, cost factor from
``settings.bcrypt_rounds``).  Tokens are JSON Web Tokens signed with
HMAC‑SHA256 and base64url encoding; they embed arbitrary claims and an
expiration timestamp (``exp``).  The secret from the application
settings is used to sign and verify them.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

import bcrypt

from .config import settings


# Only HMAC-SHA256 tokens are issued and accepted.
ALGORITHM = "HS256"
_HEADER = {"alg": ALGORITHM, "typ": "JWT"}


def encode_segment(raw: bytes) -> str:
    """Encode one token segment: base64url with the ``=`` padding stripped."""
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_segment(segment: str) -> bytes:
    """Inverse of ``encode_segment``; restores the stripped padding first."""
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _json_segment(claims: Dict[str, Any]) -> str:
    return encode_segment(json.dumps(claims, separators=(",", ":")).encode("utf-8"))


def _signature(signing_input: str) -> bytes:
    key = settings.jwt_secret.encode("utf-8")
    return hmac.new(key, signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with ``iat`` and ``exp`` fields (UNIX
    timestamps).  The token has the form ``header.payload.signature``
    where each part is base64url encoded.

    Parameters
    ----------
    data : dict
        Claims to embed in the token, e.g. ``{"user": {"id": "..."}}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.token_expire_seconds``.

    Returns
    -------
    str
        A signed JWT token.
    """
    claims = dict(data)
    now = int(time.time())
    claims["iat"] = now
    claims["exp"] = now + (expires_delta or settings.token_expire_seconds)
    signing_input = f"{_json_segment(_HEADER)}.{_json_segment(claims)}"
    return f"{signing_input}.{encode_segment(_signature(signing_input))}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature matches and the token has not
    expired, otherwise ``None``.
    """
    signing_input, _, signature = token.rpartition(".")
    if signing_input.count(".") != 1:
        return None
    try:
        if not hmac.compare_digest(_signature(signing_input), decode_segment(signature)):
            return None
        claims = json.loads(decode_segment(signing_input.split(".")[1]).decode("utf-8"))
    except ValueError:
        # Covers bad base64, non-ASCII input and malformed JSON.
        return None
    if not isinstance(claims, dict) or claims.get("exp") is None:
        return None
    if int(claims["exp"]) < int(time.time()):
        return None
    return claims


def create_user_token(user_id: str) -> str:
    """Issue the token returned on registration, asserting ``user_id``."""
    return create_access_token({"user": {"id": user_id}})


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant‑time check of a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False
