"""Password hashing and verification (bcrypt)."""

from functools import lru_cache

import bcrypt

from app.core.config import settings

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


def _to_bcrypt_input(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh salt."""
    cost = settings.BCRYPT_ROUNDS if rounds is None else rounds
    return bcrypt.hashpw(
        _to_bcrypt_input(plain_password), bcrypt.gensalt(rounds=cost)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. False on mismatch or malformed hash."""
    try:
        return bcrypt.checkpw(_to_bcrypt_input(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash(rounds: int) -> str:
    """Fixed digest checked when no user matches, so both login failures cost one bcrypt check."""
    return hash_password("not-a-real-password", rounds=rounds)
