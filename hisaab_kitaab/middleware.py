"""Request logging middleware.

Logs every HTTP request with method, path, status code and latency,
tagged with a short request ID. The ID is also stored on
request.state and echoed back in the X-Request-ID header.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("hisaab_kitaab.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request.state.request_id,
                "duration_ms": round(elapsed_ms),
            },
        )
        response.headers["X-Request-ID"] = request.state.request_id
        return response
