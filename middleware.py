import logging
import time

from fastapi import Response, Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs one line per request; browsers' favicon probes get an empty 204."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path == "/favicon.ico":
            return Response(status_code=204)
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response
