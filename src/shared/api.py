"""HTTP plumbing shared by the routers: error mapping and admin access."""

import hmac

import pydantic
from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from shared.config import env_str, is_production


def field_messages(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into the field -> messages shape of ValidationError."""
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__all__"
        messages.setdefault(field, []).append(error["msg"])
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain exceptions into JSON error responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=400, content={"error": exc.messages})

    @app.exception_handler(pydantic.ValidationError)
    async def field_error_handler(request: Request, exc: pydantic.ValidationError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=400, content={"error": field_messages(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=404, content={"error": exc.messages})

    @app.exception_handler(InvalidOperationError)
    async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(status_code=422, content={"error": exc.messages})


async def require_admin(x_admin_secret: str | None = Header(default=None)) -> None:
    """Guard admin routes with the shared ``ADMIN_SECRET``.

    Without a configured secret the guard is open, except in production
    where admin routes are refused outright.
    """
    secret = env_str("ADMIN_SECRET")
    if not secret:
        if is_production():
            raise HTTPException(status_code=403, detail="Admin access is not configured")
        return
    if x_admin_secret is None or not hmac.compare_digest(x_admin_secret, secret):
        raise HTTPException(status_code=401, detail="Invalid admin credentials")
