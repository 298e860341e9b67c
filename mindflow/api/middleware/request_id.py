"""
Request correlation for the generation proxies.

Every response carries X-Request-ID. A well-formed incoming id is reused so a
browser-side error can be matched to the server log; anything else is
replaced with a fresh UUID. Generation requests get one summary log line with
status and duration.
"""

import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from mindflow.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Generation calls routinely take several seconds; only flag the outliers
SLOW_REQUEST_MS = 30_000

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def resolve_request_id(incoming: str) -> str:
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the request, its log records and its response."""

    def __init__(self, app, log_prefix: str = "/api/"):
        super().__init__(app)
        self.log_prefix = log_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            fields = {
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": duration_ms,
            }
            if duration_ms > SLOW_REQUEST_MS:
                logger.warning("Slow request", extra=fields)
            elif request.url.path.startswith(self.log_prefix):
                logger.info("Request finished", extra=fields)
            return response
        finally:
            request_id_var.reset(token)
