"""
API Middleware package.

Contains middleware components for request processing:
- Wide Events: Canonical log line pattern for comprehensive request logging
"""

from app.api.middleware.wide_events import (
    WideEventMiddleware,
    add_ai_call_to_wide_event,
    add_ai_failure_to_wide_event,
)

__all__ = [
    "WideEventMiddleware",
    "add_ai_call_to_wide_event",
    "add_ai_failure_to_wide_event",
]
