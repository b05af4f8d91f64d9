# -*- coding: utf-8 -*-
"""Auth — credentials and session tokens.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>``.
Sessions are HS256 JWTs carried either as ``Authorization: Bearer`` or in the
``peptide_token`` cookie set at login.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request

from ..config import settings
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "peptide_token"

PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 200_000
_SALT_BYTES = 16

_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    """Malformed, forged or expired session token."""


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _b64url_json(obj: Dict[str, Any]) -> str:
    return _b64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


# passwords


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(_SALT_BYTES)
    digest = _derive(password, salt, PASSWORD_ITERATIONS)
    return "$".join([PASSWORD_SCHEME, str(PASSWORD_ITERATIONS), _b64url_encode(salt), _b64url_encode(digest)])


def _split_hash(password_hash: str) -> Optional[tuple]:
    parts = password_hash.split("$")
    if len(parts) != 4 or parts[0] != PASSWORD_SCHEME or not parts[1].isdigit():
        return None
    return int(parts[1]), parts[2], parts[3]


def verify_password(password: str, password_hash: str) -> bool:
    parsed = _split_hash(password_hash or "")
    if parsed is None:
        return False
    iterations, salt_b64, digest_b64 = parsed
    try:
        expected = _b64url_decode(digest_b64)
        actual = _derive(password, _b64url_decode(salt_b64), iterations)
    except ValueError:
        return False
    return hmac.compare_digest(actual, expected)


def password_needs_rehash(password_hash: str) -> bool:
    """True when the stored hash uses fewer iterations than the current setting."""
    parsed = _split_hash(password_hash or "")
    return parsed is None or parsed[0] < PASSWORD_ITERATIONS


# tokens


def create_access_token(*, user_id: str, email: str, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "email": email,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(days=int(settings.token_ttl_days))).timestamp()),
    }
    signing_input = f"{_b64url_json(_JWT_HEADER)}.{_b64url_json(claims)}"
    sig = hmac.new(settings.jwt_secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()
    return f"{signing_input}.{_b64url_encode(sig)}"


def read_token_claims(token: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Verify signature, algorithm and expiry; return the claims. Raises TokenError."""
    try:
        header_b64, claims_b64, sig_b64 = token.split(".")
        header = json.loads(_b64url_decode(header_b64))
        claims = json.loads(_b64url_decode(claims_b64))
        sig = _b64url_decode(sig_b64)
    except ValueError as exc:
        raise TokenError("malformed token") from exc

    if not isinstance(header, dict) or header.get("alg") != _JWT_HEADER["alg"]:
        raise TokenError("unsupported token algorithm")
    expected = hmac.new(
        settings.jwt_secret.encode("utf-8"),
        f"{header_b64}.{claims_b64}".encode("ascii"),
        hashlib.sha256,
    ).digest()
    if not hmac.compare_digest(expected, sig):
        raise TokenError("bad signature")
    if not isinstance(claims, dict) or not claims.get("sub"):
        raise TokenError("token has no subject")

    try:
        expires = int(claims.get("exp") or 0)
    except (TypeError, ValueError) as exc:
        raise TokenError("bad expiry claim") from exc
    current = int((now or datetime.now(timezone.utc)).timestamp())
    if expires < current:
        raise TokenError("token expired")
    return claims


# request helpers


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user(request: Request) -> Dict[str, Any]:
    """Dependency: the signed-in user row, or 401."""
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        claims = read_token_claims(token)
    except TokenError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    user = get_user_by_id(str(claims["sub"]))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    request.state.user = user
    return user


def get_optional_user(request: Request) -> Optional[Dict[str, Any]]:
    """Dependency: the signed-in user, or None for anonymous callers."""
    if not get_token_from_request(request):
        return None
    try:
        return get_current_user(request)
    except HTTPException:
        return None
