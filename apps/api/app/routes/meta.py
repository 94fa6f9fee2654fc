"""Service info and health routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Meta"])

_ENDPOINTS: dict[str, str] = {
    "POST /api/auth/register": "Register a new user",
    "POST /api/auth/login": "Login user",
    "GET /api/auth/me": "Current principal (authenticated)",
    "GET /api/users": "Get all users",
    "GET /api/users/{id}": "Get user by ID",
    "PUT /api/users/{id}": "Update user (owner only)",
    "DELETE /api/users/{id}": "Delete user (owner only)",
    "GET /api/users/{id}/tasks": "Get tasks by user ID",
    "GET /api/tasks": "Get all tasks",
    "POST /api/tasks": "Create task (authenticated)",
    "GET /api/tasks/{id}": "Get task by ID",
    "PUT /api/tasks/{id}": "Update task (owner only)",
    "DELETE /api/tasks/{id}": "Delete task (owner only)",
    "GET /api/health": "Health check",
}


@router.get("/")
async def index() -> dict:
    return {"message": "Task Board API", "version": "1.0.0", "endpoints": _ENDPOINTS}


@router.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
