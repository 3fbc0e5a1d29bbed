from __future__ import annotations

import hmac

from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    return pwd_context.verify(password, stored_hash)


def check_draw_secret(provided: str | None, expected: str | None) -> bool:
    """Constant-time comparison; an unset expected secret rejects everyone."""
    if not expected or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
