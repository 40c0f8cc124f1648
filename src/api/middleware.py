"""
Request logging for the calendar sync API.

Every request gets an ID (the caller's X-Request-ID when supplied) that is
echoed back, so a job tracker can match its own logs to ours.
"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-ID"

# Calendar provider rejected the call; see calendar_routes
PROVIDER_FAILURE_STATUS = 502


def _request_id(request: Request) -> str:
    return request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per calendar request and tags the response with its ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = _request_id(request)
        user_id = request.headers.get(USER_ID_HEADER, "-")
        label = f"[{req_id}] {request.method} {request.url.path} user={user_id}"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{label} crashed after {time.perf_counter() - started:.2f}s",
                extra={"request_id": req_id, "user_id": user_id},
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code == PROVIDER_FAILURE_STATUS else logging.INFO
        logger.log(
            level,
            f"{label} -> {response.status_code} ({elapsed_ms:.0f}ms)",
            extra={
                "request_id": req_id,
                "user_id": user_id,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )

        response.headers[REQUEST_ID_HEADER] = req_id
        return response
