"""Registration, login and current-principal routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.routes.dependencies import get_auth_service, get_authenticated_principal
from app.schemas.auth import AuthPrincipal, LoginRequest, LoginResponse, RegisterRequest
from app.schemas.error import ConflictError, UnauthorizedError, ValidationErrorResponse
from app.schemas.user import User
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}, 409: {"model": ConflictError}},
)
def register(
    payload: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    return service.register(username=payload.username, email=payload.email, password=payload.password)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    return service.login(username=payload.username, password=payload.password)


@router.get(
    "/me",
    response_model=AuthPrincipal,
    responses={401: {"model": UnauthorizedError}},
)
async def me(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
) -> AuthPrincipal:
    return principal
