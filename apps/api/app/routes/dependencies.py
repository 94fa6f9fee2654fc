"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Path, Request, Security
from fastapi.dependencies.models import Dependant
from fastapi.security import APIKeyHeader

from app.adapters.auth import BearerAuthenticator, PasswordHasher, TokenCodec
from app.core.logging_setup import safe_log_identifier
from app.domain.ownership import ensure_can_modify_user
from app.errors import unauthorized_error
from app.repositories.sqlite import SqliteStore
from app.schemas.auth import AuthPrincipal
from app.services.auth import AuthService
from app.services.tasks import TaskService
from app.services.users import UserService

# Raw header so the authenticator applies its own exact ``Bearer <token>`` parsing.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="bearerAuth",
    description="Session token as `Bearer <token>`, obtained from POST /api/auth/login.",
)
logger = logging.getLogger(__name__)


def request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_store(request: Request) -> SqliteStore:
    return request.app.state.store


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_authenticator(request: Request) -> BearerAuthenticator:
    return request.app.state.authenticator


async def get_authenticated_principal(
    request: Request,
    authorization: Annotated[str | None, Security(authorization_header)],
    authenticator: Annotated[BearerAuthenticator, Depends(get_authenticator)],
) -> AuthPrincipal:
    """Resolve the bearer token to a principal or reject the request with 401."""
    correlation_id = request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")

    principal = authenticator.authenticate(authorization)
    if principal is None:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            "missing_header" if not authorization else "invalid_or_expired_token",
        )
        raise unauthorized_error()

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.id, prefix="pid"),
    )
    request.state.auth_principal = principal
    return principal


_USER_ACTIONS = {"PUT": "update", "DELETE": "delete"}


def get_user_owner_principal(
    request: Request,
    user_id: Annotated[int, Path(alias="userId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
) -> AuthPrincipal:
    """Authenticated principal that owns ``userId``, checked before the request body."""
    ensure_can_modify_user(principal, user_id, action=_USER_ACTIONS.get(request.method, "modify"))
    return principal


def _depends_on_principal(dependant: Dependant) -> bool:
    return any(
        dep.call is get_authenticated_principal or _depends_on_principal(dep) for dep in dependant.dependencies
    )


def route_requires_principal(request: Request) -> bool:
    """Whether the matched route resolves a principal before running."""
    dependant = getattr(request.scope.get("route"), "dependant", None)
    return dependant is not None and _depends_on_principal(dependant)


def get_auth_service(
    store: Annotated[SqliteStore, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(store, hasher, codec)


def get_user_service(store: Annotated[SqliteStore, Depends(get_store)]) -> UserService:
    return UserService(store)


def get_task_service(store: Annotated[SqliteStore, Depends(get_store)]) -> TaskService:
    return TaskService(store)
