"""User service layer."""

from app.domain.ownership import ensure_can_modify_user
from app.errors import ApiError, not_found_error
from app.repositories.sqlite import DuplicateUserError, SqliteStore, UserRecord
from app.schemas.auth import AuthPrincipal
from app.schemas.user import User


def duplicate_user_error(field: str) -> ApiError:
    if field == "email":
        return ApiError(status_code=409, code="EMAIL_EXISTS", message="Email already registered")
    return ApiError(status_code=409, code="USERNAME_EXISTS", message="Username already exists")


def to_user(record: UserRecord) -> User:
    return User(id=record.id, username=record.username, email=record.email, created_at=record.created_at)


class UserService:
    def __init__(self, store: SqliteStore) -> None:
        self._store = store

    def list_users(self) -> list[User]:
        return [to_user(record) for record in self._store.list_users()]

    def get_user(self, *, user_id: int) -> User:
        record = self._store.get_user(user_id)
        if record is None:
            raise not_found_error()
        return to_user(record)

    def update_user(self, *, principal: AuthPrincipal, user_id: int, username: str, email: str) -> User:
        ensure_can_modify_user(principal, user_id, action="update")

        try:
            record = self._store.update_user(user_id, username=username, email=email)
        except DuplicateUserError as exc:
            raise duplicate_user_error(exc.field) from exc

        if record is None:
            raise not_found_error()
        return to_user(record)

    def delete_user(self, *, principal: AuthPrincipal, user_id: int) -> None:
        ensure_can_modify_user(principal, user_id, action="delete")

        if not self._store.delete_user(user_id):
            raise not_found_error()
