from __future__ import annotations

import hmac

from fastapi import Header, HTTPException, Request, status

from ..core.config import settings
from ..middlewares import principal_ctx_var


def _set_principal(request: Request, principal: str) -> None:
    principal_ctx_var.set(principal)
    request.state.principal = principal


async def require_api_key(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str:
    """Gate the API behind ``X-API-Key`` when ``API_KEY`` is configured.

    With no key configured the API is open, which is what local development
    and the test suite expect.
    """

    api_key = settings.API_KEY
    if not api_key:
        _set_principal(request, "anonymous")
        return "anonymous"
    provided_key = (x_api_key or "").strip()
    if provided_key and hmac.compare_digest(api_key, provided_key):
        _set_principal(request, "api-key")
        return "api-key"
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
