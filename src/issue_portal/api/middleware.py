"""
issue_portal.api.middleware

CORS and last-resort error handling.

Responsibilities:
- Answer every OPTIONS preflight immediately, before routing or auth.
- Stamp the CORS headers on every response, errors included.
- Turn any unhandled exception into a 500 `{"error": <message>}` body.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from issue_portal.observability.logging import get_logger

log = get_logger(__name__)


class CorsMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, allow_origin: str, allow_headers: str) -> None:
        super().__init__(app)
        self._headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self._headers)

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log.exception("unhandled_error", error_type=type(e).__name__)
            response = JSONResponse({"error": str(e) or type(e).__name__}, status_code=500)

        response.headers.update(self._headers)
        return response


# --- Module Notes -----------------------------------------------------------
# Exceptions are caught here, inside Starlette's ServerErrorMiddleware, so 500s keep
# the CORS headers.
