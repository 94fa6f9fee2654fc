"""Task service layer."""

from app.domain.ownership import ensure_can_modify_task
from app.errors import not_found_error, unauthorized_error
from app.repositories.sqlite import SqliteStore, TaskRecord
from app.schemas.auth import AuthPrincipal
from app.schemas.task import Task


class TaskService:
    def __init__(self, store: SqliteStore) -> None:
        self._store = store

    def list_tasks(self) -> list[Task]:
        return [self._to_task(record) for record in self._store.list_tasks()]

    def list_tasks_for_user(self, *, user_id: int) -> list[Task]:
        return [self._to_task(record) for record in self._store.list_tasks_for_user(user_id)]

    def get_task(self, *, task_id: int) -> Task:
        record = self._store.get_task(task_id)
        if record is None:
            raise not_found_error()
        return self._to_task(record)

    def create_task(self, *, principal: AuthPrincipal, title: str, description: str) -> Task:
        # Tokens outlive account deletion; refuse to attach tasks to a missing owner.
        if self._store.get_user(principal.id) is None:
            raise unauthorized_error()

        record = self._store.create_task(title=title, description=description, user_id=principal.id)
        return self._to_task(record)

    def update_task(
        self,
        *,
        principal: AuthPrincipal,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        current = self._store.get_task(task_id)
        if current is None:
            raise not_found_error()
        ensure_can_modify_task(principal, current.user_id, action="update")

        record = self._store.update_task(
            task_id,
            title=current.title if title is None else title,
            description=current.description if description is None else description,
            completed=current.completed if completed is None else completed,
        )
        if record is None:
            raise not_found_error()
        return self._to_task(record)

    def delete_task(self, *, principal: AuthPrincipal, task_id: int) -> None:
        current = self._store.get_task(task_id)
        if current is None:
            raise not_found_error()
        ensure_can_modify_task(principal, current.user_id, action="delete")

        if not self._store.delete_task(task_id):
            raise not_found_error()

    @staticmethod
    def _to_task(record: TaskRecord) -> Task:
        return Task(
            id=record.id,
            title=record.title,
            description=record.description,
            completed=record.completed,
            user_id=record.user_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
