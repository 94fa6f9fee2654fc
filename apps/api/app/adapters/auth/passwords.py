"""Argon2id password hasher."""

from __future__ import annotations

import logging
import secrets

from argon2 import PasswordHasher as _Argon2
from argon2 import Type
from argon2.exceptions import InvalidHashError, VerificationError

from app.adapters.auth.base import PasswordHasher

logger = logging.getLogger(__name__)


class Argon2PasswordHasher(PasswordHasher):
    """Salted, memory-hard password verifiers in PHC string format.

    Each call to :meth:`hash` draws a fresh random salt, so two hashes of the
    same secret differ; :meth:`verify` recomputes with the salt and cost
    parameters embedded in the stored verifier.
    """

    def __init__(self, *, time_cost: int = 3, memory_cost: int = 64 * 1024, parallelism: int = 4) -> None:
        self._hasher = _Argon2(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._dummy_verifier = self._hasher.hash(secrets.token_urlsafe(16))

    def hash(self, secret: str) -> str:
        return self._hasher.hash(secret)

    def verify(self, secret: str, verifier: str) -> bool:
        if not verifier:
            return False
        try:
            return self._hasher.verify(verifier, secret)
        except (VerificationError, InvalidHashError, UnicodeError):
            return False

    def verify_dummy(self, secret: str) -> None:
        self.verify(secret, self._dummy_verifier)

    def needs_rehash(self, verifier: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(verifier)
        except (InvalidHashError, ValueError):
            logger.warning("password.verifier_unparseable")
            return True


__all__ = ["Argon2PasswordHasher"]
