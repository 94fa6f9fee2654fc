"""Owner-match authorization rules for mutating operations.

Reads are public; only update and delete are gated, and only on ownership.
"""

from app.errors import forbidden_error
from app.schemas.auth import AuthPrincipal


def can_modify_user(principal: AuthPrincipal, target_user_id: int) -> bool:
    return principal.id == target_user_id


def can_modify_task(principal: AuthPrincipal, task_owner_id: int) -> bool:
    return principal.id == task_owner_id


def ensure_can_modify_user(principal: AuthPrincipal, target_user_id: int, *, action: str) -> None:
    if not can_modify_user(principal, target_user_id):
        raise forbidden_error(f"Unauthorized to {action} this user")


def ensure_can_modify_task(principal: AuthPrincipal, task_owner_id: int, *, action: str) -> None:
    if not can_modify_task(principal, task_owner_id):
        raise forbidden_error(f"Unauthorized to {action} this task")
