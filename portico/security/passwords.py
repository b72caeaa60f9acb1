"""Password hashing with PBKDF2-HMAC-SHA256."""

import base64
import binascii
import hashlib
import hmac
import os
from typing import Optional

ITERATIONS = 100_000
SALT_BYTES = 16


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    """Hash *password*; the random salt is stored in front of the digest."""
    salt = salt or os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, ITERATIONS)
    return base64.urlsafe_b64encode(salt + digest).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Return True if *password* matches *hashed*. Malformed hashes never match."""
    try:
        data = base64.urlsafe_b64decode(hashed.encode())
    except (binascii.Error, ValueError):
        return False
    if len(data) <= SALT_BYTES:
        return False
    salt, digest = data[:SALT_BYTES], data[SALT_BYTES:]
    check = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, ITERATIONS)
    return hmac.compare_digest(digest, check)
