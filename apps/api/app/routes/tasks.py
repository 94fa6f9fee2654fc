"""Task routes. Reads are public; writes need a token, and update/delete need ownership."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.routes.dependencies import get_authenticated_principal, get_task_service
from app.schemas.auth import AuthPrincipal
from app.schemas.error import ForbiddenError, NotFoundError, UnauthorizedError, ValidationErrorResponse
from app.schemas.task import CreateTaskRequest, Task, UpdateTaskRequest
from app.services.tasks import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=list[Task])
def list_tasks(service: Annotated[TaskService, Depends(get_task_service)]) -> list[Task]:
    return service.list_tasks()


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
def create_task(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    payload: CreateTaskRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.create_task(principal=principal, title=payload.title, description=payload.description)


@router.get(
    "/{taskId}",
    response_model=Task,
    responses={404: {"model": NotFoundError}},
)
def get_task(
    task_id: Annotated[int, Path(alias="taskId")],
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.get_task(task_id=task_id)


@router.put(
    "/{taskId}",
    response_model=Task,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
    },
)
def update_task(
    task_id: Annotated[int, Path(alias="taskId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    payload: UpdateTaskRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Task:
    return service.update_task(
        principal=principal,
        task_id=task_id,
        title=payload.title,
        description=payload.description,
        completed=payload.completed,
    )


@router.delete(
    "/{taskId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
    },
)
def delete_task(
    task_id: Annotated[int, Path(alias="taskId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    service.delete_task(principal=principal, task_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
