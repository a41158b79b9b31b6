from __future__ import annotations

import logging
import re
import time
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
principal_ctx_var: ContextVar[str | None] = ContextVar("principal_id", default=None)
logger = logging.getLogger("sports_inventory.request")

_CLIENT_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
# Liveness and scrape endpoints are only logged at DEBUG.
_QUIET_PATHS = frozenset({"/health", "/metrics"})


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _level_for(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path in _QUIET_PATHS:
        return logging.DEBUG
    return logging.INFO


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every API call with a correlation id and log one line per call.

    A caller-supplied ``X-Request-ID`` is echoed back when it is a short
    token; anything else is replaced by a fresh UUID. The log line carries
    the route template (``/api/v1/equipment/{equipment_id}``) and, for failed
    calls, the error ``code`` the exception handlers put on
    ``request.state``.
    """

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:  # type: ignore[override]
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        supplied = request.headers.get(self.header_name, "")
        request_id = supplied if _CLIENT_ID.match(supplied) else uuid4().hex
        request.state.request_id = request_id
        request_token = request_id_ctx_var.set(request_id)
        principal_token = principal_ctx_var.set(None)
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "request.failed",
                    extra={"extra_data": {"method": request.method, "route": _route_template(request)}},
                )
                raise
            elapsed = (time.perf_counter() - start) * 1000
            response.headers[self.header_name] = request_id
            response.headers.setdefault("X-Response-Time", f"{elapsed:.2f}ms")

            data = {
                "method": request.method,
                "route": _route_template(request),
                "status": response.status_code,
                "duration_ms": round(elapsed, 2),
            }
            principal = getattr(request.state, "principal", None)
            if principal:
                data["principal"] = principal
            error_code = getattr(request.state, "error_code", None)
            if error_code:
                data["error_code"] = error_code
            logger.log(_level_for(request.url.path, response.status_code), "request.completed", extra={"extra_data": data})
        finally:
            request_id_ctx_var.reset(request_token)
            principal_ctx_var.reset(principal_token)
        return response
