"""Credential hashing helpers (salted key derivation and verification)."""

from __future__ import annotations

import hashlib
import secrets

from argon2 import exceptions as argon_exc
from argon2.low_level import Type, hash_secret_raw

SALT_BYTES = 16
KEY_LENGTH = 64
_ARGON2_PREFIX = "argon2id$"
_ARGON2_TIME_COST = 2
_ARGON2_MEMORY_COST = 19456
_ARGON2_PARALLELISM = 1
_PBKDF2_ITERATIONS = 1000


def _argon2_hash(password: str, salt: str) -> str:
    digest = hash_secret_raw(
        secret=password.encode(),
        salt=bytes.fromhex(salt),
        time_cost=_ARGON2_TIME_COST,
        memory_cost=_ARGON2_MEMORY_COST,
        parallelism=_ARGON2_PARALLELISM,
        hash_len=KEY_LENGTH,
        type=Type.ID,
    )
    return f"{_ARGON2_PREFIX}{digest.hex()}"


def _legacy_hash(password: str, salt: str) -> str:
    # Documents written before Argon2 used the hex text of the salt as the salt bytes.
    return hashlib.pbkdf2_hmac("sha512", password.encode(), salt.encode(), _PBKDF2_ITERATIONS, KEY_LENGTH).hex()


class CredentialHasher:
    """Deterministic salted hashing: the same password and salt always give the same digest."""

    def __init__(self, scheme: str = "argon2id") -> None:
        if scheme not in ("argon2id", "pbkdf2"):
            raise ValueError(f"Unknown password scheme: {scheme}")
        self.scheme = scheme

    def new_salt(self) -> str:
        return secrets.token_bytes(SALT_BYTES).hex()

    def hash(self, password: str, salt: str) -> str:
        if self.scheme == "argon2id":
            return _argon2_hash(password, salt)
        return _legacy_hash(password, salt)

    def verify(self, password: str, salt: str, stored_hash: str | None) -> bool:
        """Recompute with the scheme the stored digest was made with and compare in constant time."""
        stored = stored_hash or ""
        if stored.startswith(_ARGON2_PREFIX):
            try:
                candidate = _argon2_hash(password, salt)
            except (ValueError, argon_exc.HashingError):
                return False
        else:
            candidate = _legacy_hash(password, salt)
        return secrets.compare_digest(candidate.encode(), stored.encode())
