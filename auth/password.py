"""
Account password hashing.

bcrypt with the cost factor taken from ``Settings.bcrypt_rounds``. bcrypt
only reads 72 bytes of input, and current releases raise on anything
longer, so both directions hash the first 72 bytes of the UTF-8 encoding.
A long passphrase registers and logs in the same way it would under the
JavaScript client libraries.
"""

from __future__ import annotations

import bcrypt

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Salted bcrypt hash at ``rounds`` cost."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check; a malformed stored hash counts as a mismatch."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
