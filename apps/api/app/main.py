"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.adapters.auth import Argon2PasswordHasher, BearerAuthenticator, JwtTokenCodec
from app.core.config import Settings, get_settings
from app.core.logging_setup import safe_log_identifier
from app.errors import ApiError, unauthorized_error
from app.repositories.sqlite import SqliteStore
from app.routes import auth_router, meta_router, tasks_router, users_router
from app.routes.dependencies import request_correlation_id, route_requires_principal
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _validation_details(exc: RequestValidationError) -> dict:
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.append({"field": ".".join(location) or None, "message": error.get("msg", "")})
    return {"errors": fields}


def _is_path_error(exc: RequestValidationError) -> bool:
    return any(error.get("loc") and error["loc"][0] == "path" for error in exc.errors())


def _is_json_decode_error(exc: RequestValidationError) -> bool:
    return any(error.get("type") == "json_invalid" for error in exc.errors())


def _api_error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.payload.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Task Board API", version="1.0.0")
    app.state.settings = settings

    store = SqliteStore(settings.database_path)
    store.initialize()
    codec = JwtTokenCodec(secret=settings.jwt_secret, ttl=timedelta(seconds=settings.token_ttl_seconds))
    app.state.store = store
    app.state.password_hasher = Argon2PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )
    app.state.token_codec = codec
    app.state.authenticator = BearerAuthenticator(codec)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Correlation-Id"],
    )

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return _api_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Non-numeric ids never match a resource.
        if _is_path_error(exc):
            payload = ErrorResponse(code="RESOURCE_NOT_FOUND", message="Resource not found")
            return JSONResponse(status_code=404, content=payload.model_dump(exclude_none=True))
        if _is_json_decode_error(exc):
            # The body is decoded before dependencies run, so authenticate here first.
            if route_requires_principal(request) and request.app.state.authenticator.authenticate(
                request.headers.get("Authorization")
            ) is None:
                logger.warning(
                    "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
                    safe_log_identifier(request_correlation_id(request), prefix="cid"),
                    request.method,
                    request.url.path,
                    "unauthenticated_malformed_body",
                )
                return _api_error_response(unauthorized_error())
            payload = ErrorResponse(code="VALIDATION_ERROR", message="Invalid JSON format")
            return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details=_validation_details(exc),
        )
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request.failed correlation_id=%s method=%s path=%s",
            safe_log_identifier(request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
            exc_info=exc,
        )
        payload = ErrorResponse(code="INTERNAL_ERROR", message="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))

    api_prefix = "/api"
    app.include_router(meta_router)
    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(tasks_router, prefix=api_prefix)

    logger.info(
        "app.started database=%s token_ttl_seconds=%s",
        settings.database_path,
        settings.token_ttl_seconds,
    )
    return app
