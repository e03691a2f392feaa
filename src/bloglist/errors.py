"""Error taxonomy for the bloglist service and its HTTP mapping."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = structlog.get_logger()


@dataclass(frozen=True)
class FieldError:
    """A single violated field constraint."""

    field: str
    message: str


class BlogListError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, object]:
        return {"error": self.message}


class ValidationError(BlogListError):
    """Missing or malformed field, account policy or uniqueness violation."""

    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))
        self.errors = errors

    def to_body(self) -> dict[str, object]:
        return {
            "error": self.message,
            "fields": [{"field": e.field, "message": e.message} for e in self.errors],
        }


class UsernameTakenError(ValidationError):
    def __init__(self, username: str) -> None:
        super().__init__([FieldError("username", "expected `username` to be unique")])
        self.username = username


class MalformedIdError(BlogListError):
    """Id is not syntactically valid for the store."""

    status_code = 400

    def __init__(self, raw_id: str) -> None:
        super().__init__("malformatted id")
        self.raw_id = raw_id


class NotFoundError(BlogListError):
    status_code = 404


class AuthenticationError(BlogListError):
    status_code = 401


class ConfigurationError(BlogListError):
    """Server-side misconfiguration; details are logged, not returned."""

    status_code = 500

    def to_body(self) -> dict[str, object]:
        return {"error": "Server misconfigured"}


async def _handle_blog_list_error(request: Request, exc: BlogListError) -> JSONResponse:
    if exc.status_code >= 500:
        await log.aerror("request_failed", path=request.url.path, error=exc.message)
    else:
        await log.ainfo(
            "request_rejected",
            path=request.url.path,
            status=exc.status_code,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _field_name(loc: tuple[int | str, ...]) -> str:
    # Integer parts are list indexes or JSON decode offsets, not field names
    names = [str(p) for p in loc if p != "body" and not isinstance(p, int)]
    return ".".join(names) or "body"


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        FieldError(
            field=_field_name(tuple(err.get("loc", ()))),
            message=err.get("msg", "invalid value"),
        )
        for err in exc.errors()
    ]
    return await _handle_blog_list_error(request, ValidationError(errors))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    await log.aerror(
        "request_crashed", path=request.url.path, method=request.method, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    """Translate domain errors and malformed request bodies into JSON responses."""
    app.add_exception_handler(Exception, _handle_unexpected)
    app.add_exception_handler(BlogListError, _handle_blog_list_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, _handle_request_validation  # type: ignore[arg-type]
    )
