"""Domain error taxonomy and the JSON envelope used to report it over HTTP.

Every failure the inventory core can produce is an ``InventoryError``. The
subclasses carry a stable machine-readable ``code`` and the HTTP status the
API layer should answer with, so routers never need their own mapping.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException


class InventoryError(Exception):
    code = "inventory_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConstraintViolation(InventoryError):
    """A uniqueness, non-null or check constraint would be violated."""

    code = "constraint_violation"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidArgument(InventoryError):
    """A caller passed a non-positive quantity or an otherwise unusable value."""

    code = "invalid_argument"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFound(InventoryError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found", details={"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class ReferentialIntegrityViolation(InventoryError):
    """A foreign reference does not resolve, or a delete would leave one dangling."""

    code = "referential_integrity_violation"
    status_code = status.HTTP_409_CONFLICT


class InsufficientStock(InventoryError):
    code = "insufficient_stock"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, equipment_id: int, requested: int, available: int | None = None) -> None:
        details: dict[str, Any] = {"equipment_id": equipment_id, "requested": requested}
        if available is not None:
            details["available"] = available
        super().__init__("Not enough stock available", details=details)
        self.equipment_id = equipment_id
        self.requested = requested
        self.available = available


class InvariantViolation(InventoryError):
    """Post-mutation state broke an invariant. The enclosing unit is rolled back."""

    code = "invariant_violation"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def inventory_exception_handler(request: Request, exc: InventoryError):
    request.state.error_code = exc.code
    return ErrorEnvelope(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    details = detail if isinstance(detail, dict) else None
    request.state.error_code = "http_error"
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc):  # type: ignore[override]
    from fastapi.encoders import jsonable_encoder
    from fastapi.exceptions import RequestValidationError

    if isinstance(exc, RequestValidationError):
        request.state.error_code = "validation_error"
        return ErrorEnvelope(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": jsonable_encoder(exc.errors())},
        )
    raise exc
