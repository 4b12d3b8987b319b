"""
Password hashing with salted scrypt.

Stored format: scrypt$<salt hex>$<hash hex>

Both functions are CPU bound; async callers run them with asyncio.to_thread.
"""

import hashlib
import hmac
import os
from typing import Optional

_SCHEME = "scrypt"
_SALT_BYTES = 16
_N, _R, _P = 2**14, 8, 1
_DKLEN = 64
_UNKNOWN_USER_SALT = bytes(_SALT_BYTES)


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"), salt=salt, n=_N, r=_R, p=_P, dklen=_DKLEN
    )


def hash_password(password: str) -> str:
    salt = os.urandom(_SALT_BYTES)
    return f"{_SCHEME}${salt.hex()}${_derive(password, salt).hex()}"


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check password against a stored hash.

    With no stored hash (unknown account) a full derivation still runs and the
    result is False, so both failures cost the same.
    """
    if password_hash is None:
        _derive(password, _UNKNOWN_USER_SALT)
        return False
    try:
        scheme, salt_hex, hash_hex = password_hash.split("$")
        salt, expected = bytes.fromhex(salt_hex), bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    if scheme != _SCHEME:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)
