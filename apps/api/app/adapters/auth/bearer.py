"""Bearer token extraction from the ``Authorization`` header."""

from __future__ import annotations

import re

from app.adapters.auth.base import TokenCodec
from app.schemas.auth import AuthPrincipal

_BEARER_RE = re.compile(r"Bearer\s+(\S+)")


def parse_bearer_token(header: str | None) -> str | None:
    """Return the token from ``Bearer <token>``, or ``None`` for anything else."""
    if not header:
        return None
    match = _BEARER_RE.fullmatch(header)
    if match is None:
        return None
    return match.group(1)


class BearerAuthenticator:
    """Resolves an ``Authorization`` header value to a principal."""

    def __init__(self, codec: TokenCodec) -> None:
        self._codec = codec

    def authenticate(self, authorization_header: str | None) -> AuthPrincipal | None:
        token = parse_bearer_token(authorization_header)
        if token is None:
            return None
        return self._codec.verify(token)


__all__ = ["BearerAuthenticator", "parse_bearer_token"]
