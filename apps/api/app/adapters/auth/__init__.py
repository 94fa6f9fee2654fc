"""Auth adapters: password hashing, session tokens and bearer authentication."""

from .base import AuthVerificationError, IssuedToken, PasswordHasher, TokenCodec
from .bearer import BearerAuthenticator, parse_bearer_token
from .passwords import Argon2PasswordHasher
from .tokens import JwtTokenCodec

__all__ = [
    "AuthVerificationError",
    "IssuedToken",
    "PasswordHasher",
    "TokenCodec",
    "BearerAuthenticator",
    "parse_bearer_token",
    "Argon2PasswordHasher",
    "JwtTokenCodec",
]
