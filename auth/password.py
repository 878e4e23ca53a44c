"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes; newer releases raise instead
# of truncating, so truncate explicitly on both sides.
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """Throwaway digest at ``rounds``, built once per work factor."""
    return hash_password("not-a-real-password", rounds)


def burn_verify(password: str, rounds: int = DEFAULT_ROUNDS) -> None:
    """
    Spend one verify's worth of time without a real digest.

    Called when the account does not exist, so both login failure paths
    do the same bcrypt work at the configured ``rounds``.
    """
    verify_password(password, dummy_hash(rounds))
