"""User routes. Reads are public; update and delete are owner-only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.routes.dependencies import get_task_service, get_user_owner_principal, get_user_service
from app.schemas.auth import AuthPrincipal
from app.schemas.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationErrorResponse,
)
from app.schemas.task import Task
from app.schemas.user import UpdateUserRequest, User
from app.services.tasks import TaskService
from app.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[User])
def list_users(service: Annotated[UserService, Depends(get_user_service)]) -> list[User]:
    return service.list_users()


@router.get(
    "/{userId}",
    response_model=User,
    responses={404: {"model": NotFoundError}},
)
def get_user(
    user_id: Annotated[int, Path(alias="userId")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.get_user(user_id=user_id)


@router.put(
    "/{userId}",
    response_model=User,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
        409: {"model": ConflictError},
    },
)
def update_user(
    user_id: Annotated[int, Path(alias="userId")],
    principal: Annotated[AuthPrincipal, Depends(get_user_owner_principal)],
    payload: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.update_user(
        principal=principal,
        user_id=user_id,
        username=payload.username,
        email=payload.email,
    )


@router.delete(
    "/{userId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
    },
)
def delete_user(
    user_id: Annotated[int, Path(alias="userId")],
    principal: Annotated[AuthPrincipal, Depends(get_user_owner_principal)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    service.delete_user(principal=principal, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{userId}/tasks", response_model=list[Task])
def list_user_tasks(
    user_id: Annotated[int, Path(alias="userId")],
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[Task]:
    return service.list_tasks_for_user(user_id=user_id)
