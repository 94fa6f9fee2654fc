"""HMAC-signed JWT session tokens."""

from __future__ import annotations

import binascii
from datetime import UTC, datetime, timedelta
from typing import Any, Callable

import jwt
from jwt.utils import base64url_decode, base64url_encode

from app.adapters.auth.base import AuthVerificationError, IssuedToken, TokenCodec
from app.schemas.auth import AuthPrincipal

_JWT_ALG = "HS256"
_REQUIRED_CLAIMS = ["sub", "name", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _is_canonical_segment(segment: str) -> bool:
    # base64url decoding ignores stray padding bits and junk characters.
    try:
        return base64url_encode(base64url_decode(segment)).decode("ascii") == segment
    except (binascii.Error, ValueError, UnicodeError):
        return False


class JwtTokenCodec(TokenCodec):
    """Stateless bearer tokens carrying ``sub``, ``name``, ``iat`` and ``exp``.

    Tokens cannot be revoked before expiry: nothing is stored server-side.
    """

    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(
        self,
        principal_id: int,
        display_name: str,
        ttl: timedelta | None = None,
    ) -> IssuedToken:
        now = self._clock()
        issued_at = int(now.timestamp())
        expires_at = issued_at + int((self._ttl if ttl is None else ttl).total_seconds())

        payload: dict[str, Any] = {
            "sub": str(principal_id),
            "name": display_name,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=_JWT_ALG)
        return IssuedToken(
            token=token,
            expires_at=datetime.fromtimestamp(expires_at, tz=UTC),
            principal=AuthPrincipal(id=principal_id, display_name=display_name),
        )

    def decode(self, token: str) -> AuthPrincipal:
        if not isinstance(token, str) or not token:
            raise AuthVerificationError("token_malformed")

        segments = token.split(".")
        if len(segments) != 3 or not all(_is_canonical_segment(s) for s in segments):
            raise AuthVerificationError("token_malformed")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_JWT_ALG],
                # Expiry is checked below against the injected clock.
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as exc:
            raise AuthVerificationError("token_invalid") from exc

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise AuthVerificationError("token_claims_invalid")
        if exp <= self._clock().timestamp():
            raise AuthVerificationError("token_expired")

        name = payload.get("name")
        sub = payload.get("sub")
        if not isinstance(name, str) or not isinstance(sub, str):
            raise AuthVerificationError("token_claims_invalid")
        try:
            principal_id = int(sub)
        except ValueError as exc:
            raise AuthVerificationError("token_claims_invalid") from exc

        return AuthPrincipal(id=principal_id, display_name=name)


__all__ = ["JwtTokenCodec"]
