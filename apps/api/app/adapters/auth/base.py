"""Authentication provider interfaces."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or normalized."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_at: datetime
    principal: AuthPrincipal


class PasswordHasher(ABC):
    """Turns plaintext secrets into stored verifiers and checks them back."""

    @abstractmethod
    def hash(self, secret: str) -> str:
        """Return a non-reversible verifier for ``secret``."""

    @abstractmethod
    def verify(self, secret: str, verifier: str) -> bool:
        """Return whether ``secret`` matches ``verifier``. Never raises."""

    def needs_rehash(self, verifier: str) -> bool:
        return False

    def verify_dummy(self, secret: str) -> None:
        """Spend one verification's cost without a stored verifier."""


class TokenCodec(ABC):
    """Issues and verifies stateless bearer tokens."""

    @abstractmethod
    def issue(
        self,
        principal_id: int,
        display_name: str,
        ttl: timedelta | None = None,
    ) -> IssuedToken:
        """Sign a token binding the principal to an absolute expiry."""

    @abstractmethod
    def decode(self, token: str) -> AuthPrincipal:
        """Verify token and return the principal, raising ``AuthVerificationError``."""

    def verify(self, token: str) -> AuthPrincipal | None:
        """Verify token and return the principal, or ``None`` when it is not acceptable."""
        try:
            return self.decode(token)
        except AuthVerificationError as exc:
            logger.debug("token.rejected reason=%s", exc.reason)
            return None


__all__ = ["AuthVerificationError", "IssuedToken", "PasswordHasher", "TokenCodec"]
