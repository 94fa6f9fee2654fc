"""Application exception types."""

from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        self.headers = headers
        super().__init__(message)


def not_found_error() -> ApiError:
    return ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")


def forbidden_error(message: str) -> ApiError:
    return ApiError(status_code=403, code="FORBIDDEN", message=message)


def unauthorized_error() -> ApiError:
    return ApiError(
        status_code=401,
        code="UNAUTHORIZED",
        message="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )


__all__ = ["ApiError", "forbidden_error", "not_found_error", "unauthorized_error"]
