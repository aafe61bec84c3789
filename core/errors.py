from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError


class ApiError(HTTPException):
    """HTTP error rendered as ``{"error": ..., <details_key>: ...}``.

    ``extra`` is merged into the body, e.g. the id of a missing resource.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"
    details_key = "details"

    def __init__(
        self,
        details: str | None = None,
        *,
        error: str | None = None,
        status_code: int | None = None,
        extra: dict[str, Any] | None = None,
    ):
        super().__init__(status_code=status_code or self.status_code, detail=details)
        self.error = error or self.error
        self.details = details
        self.extra = extra or {}

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body[self.details_key] = self.details
        body.update(self.extra)
        return body


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation error"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Access token required"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Invalid or expired token"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class DatabaseError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Database error"
    details_key = "message"


class AuthProviderError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid token"


_ERROR_TITLES = {
    "missing": "Missing required fields",
    "coordinates_missing": "Missing required fields",
    "coordinate_type": "Invalid coordinates",
    "coordinate_range": "Invalid coordinates",
    "status": "Invalid status",
}


def validation_error_from(exc: RequestValidationError | PydanticValidationError) -> ValidationError:
    """Report only the first failure pydantic collected."""
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request")
    err = errors[0]
    kind = err.get("type")
    loc = [str(part) for part in err.get("loc", ()) if part != "body"]
    title = _ERROR_TITLES.get(kind)
    if kind == "missing":
        details = f"{loc[-1]} is required" if loc else "Request body is required"
    elif kind == "json_invalid":
        details = "Request body must be valid JSON"
    else:
        details = err.get("msg", "Invalid request")
    if title is None and kind in ("string_too_long", "string_type") and loc:
        title = f"Invalid {loc[-1]}"
    return ValidationError(details, error=title)


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    err = validation_error_from(exc)
    return JSONResponse(status_code=err.status_code, content=err.to_dict())
