"""
Wide Events Middleware for FastAPI.

This middleware implements the canonical log line pattern:
- Initializes a wide event at request start
- Handlers enrich it with grammar-lab context
- Finalizes and emits on request completion
- One comprehensive log entry per request

Usage:
    app.add_middleware(WideEventMiddleware)

Then in your handlers:
    from app.api.middleware import add_ai_call_to_wide_event

    @router.post("/grammar/transform")
    async def transform(body: TransformRequest):
        add_ai_call_to_wide_event(provider=body.provider, action=body.action)
        ...
"""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import (
    emit_wide_event,
    enrich_event,
    finalize_request_event,
    init_request_event,
)


class WideEventMiddleware(BaseHTTPMiddleware):
    """
    Middleware that captures wide events for every request.

    Creates one comprehensive log entry per request containing:
    - Request metadata (method, path, client)
    - AI context (added by handlers via add_ai_call_to_wide_event)
    - Response metadata (status, duration)
    - Error context (if applicable)

    Query parameters are not recorded: transliteration queries carry
    whatever the user is typing.
    """

    # Paths to skip (health checks generate too much noise)
    SKIP_PATHS = {"/api/health", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        init_request_event(
            request_id=request.headers.get("x-request-id"),
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
            user_agent=request.headers.get("user-agent", ""),
        )

        error: Exception | None = None
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response

        except Exception as e:
            error = e
            status_code = getattr(e, "status_code", 500)
            raise

        finally:
            event = finalize_request_event(status_code, error)
            emit_wide_event(event)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, respecting proxy headers."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"


def add_ai_call_to_wide_event(
    provider: str | None = None,
    action: str | None = None,
    has_image: bool = False,
    prompt_chars: int | None = None,
) -> None:
    """Add AI request context to the wide event. Never pass secrets here."""
    enrich_event(
        ai={
            "provider": provider,
            "action": action,
            "has_image": has_image,
            "prompt_chars": prompt_chars,
        }
    )


def add_ai_failure_to_wide_event(error_type: str, message: str) -> None:
    """Record why an AI-backed request failed (the response body has the same message)."""
    enrich_event(**{"ai.error_type": error_type, "ai.error_message": message[:300]})
