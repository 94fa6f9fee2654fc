"""Registration and login."""

from __future__ import annotations

import logging

from app.adapters.auth import PasswordHasher, TokenCodec
from app.core.logging_setup import safe_log_identifier
from app.errors import ApiError
from app.repositories.sqlite import DuplicateUserError, SqliteStore
from app.schemas.auth import LoginResponse
from app.schemas.user import User
from app.services.users import duplicate_user_error, to_user

logger = logging.getLogger(__name__)


def _invalid_credentials() -> ApiError:
    return ApiError(
        status_code=401,
        code="INVALID_CREDENTIALS",
        message="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthService:
    def __init__(self, store: SqliteStore, hasher: PasswordHasher, codec: TokenCodec) -> None:
        self._store = store
        self._hasher = hasher
        self._codec = codec

    def register(self, *, username: str, email: str, password: str) -> User:
        if self._store.get_user_by_username(username) is not None:
            raise duplicate_user_error("username")

        try:
            record = self._store.create_user(
                username=username,
                email=email,
                password_hash=self._hasher.hash(password),
            )
        except DuplicateUserError as exc:
            raise duplicate_user_error(exc.field) from exc

        logger.info("auth.registered user_id=%s", safe_log_identifier(record.id, prefix="uid"))
        return to_user(record)

    def login(self, *, username: str, password: str) -> LoginResponse:
        record = self._store.get_user_by_username(username)
        if record is None:
            # Same hashing cost as a real check, so timing does not reveal the account.
            self._hasher.verify_dummy(password)
            logger.info("auth.login_failed reason=invalid_credentials")
            raise _invalid_credentials()

        if not self._hasher.verify(password, record.password_hash):
            logger.info(
                "auth.login_failed user_id=%s reason=invalid_credentials",
                safe_log_identifier(record.id, prefix="uid"),
            )
            raise _invalid_credentials()

        if self._hasher.needs_rehash(record.password_hash):
            self._store.update_password_hash(record.id, self._hasher.hash(password))
            logger.info("auth.verifier_upgraded user_id=%s", safe_log_identifier(record.id, prefix="uid"))

        issued = self._codec.issue(record.id, record.username)
        logger.info("auth.login user_id=%s", safe_log_identifier(record.id, prefix="uid"))
        return LoginResponse(
            access_token=issued.token,
            expires_at=issued.expires_at,
            user=to_user(record),
        )

