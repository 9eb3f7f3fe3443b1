from __future__ import annotations

import datetime as dt
import json
import uuid
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

from mall_api.core.settings import Settings


ACCESS_TTL_SECONDS = 30 * 60
MIN_PASSWORD_LENGTH = 8


_pwd_hasher = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8)


def hash_password(password: str) -> str:
    # Enforce policy in code even if request validation is bypassed.
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError("password_too_short")
    return _pwd_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return _pwd_hasher.verify(hashed_password, password)
    except VerifyMismatchError:
        return False


def _load_signing_keys(settings: Settings) -> dict[str, str]:
    if not settings.jwt_signing_keys_json:
        raise RuntimeError("MALL_JWT_SIGNING_KEYS_JSON is required")
    raw = json.loads(settings.jwt_signing_keys_json)
    if not isinstance(raw, dict):
        raise ValueError("MALL_JWT_SIGNING_KEYS_JSON must be a JSON object")
    keys: dict[str, str] = {}
    for k, v in raw.items():
        if isinstance(k, str) and isinstance(v, str):
            keys[k] = v
    if not keys:
        raise ValueError("MALL_JWT_SIGNING_KEYS_JSON must contain at least one kid")
    return keys


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def issue_access_token(
    *,
    member_id: uuid.UUID,
    settings: Settings,
    ttl_seconds: int = ACCESS_TTL_SECONDS,
) -> tuple[str, int]:
    keys = _load_signing_keys(settings)
    kid = settings.jwt_kid_current
    key = keys.get(kid)
    if not key:
        raise RuntimeError("MALL_JWT_KID_CURRENT not found in signing key map")

    now = _now_utc()
    payload: dict[str, Any] = {
        "sub": str(member_id),
        "typ": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + dt.timedelta(seconds=ttl_seconds)).timestamp()),
    }
    token = jwt.encode(payload, key, algorithm="HS256", headers={"kid": kid})
    return token, ttl_seconds


def decode_access_token(*, token: str, settings: Settings) -> dict[str, Any]:
    keys = _load_signing_keys(settings)

    # Select key by header.kid to support key rotation.
    header = jwt.get_unverified_header(token)
    kid = header.get("kid")
    if not isinstance(kid, str) or kid not in keys:
        raise jwt.InvalidTokenError("unknown kid")

    payload = jwt.decode(
        token,
        keys[kid],
        algorithms=["HS256"],
        options={"require": ["exp", "iat", "sub"]},
    )
    if payload.get("typ") != "access":
        raise jwt.InvalidTokenError("wrong token type")
    return payload
