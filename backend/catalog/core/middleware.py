import logging
from datetime import datetime

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..api.responses import error_response

logger = logging.getLogger(__name__)


class PanicRecoveryMiddleware(BaseHTTPMiddleware):
    """Log any exception that escapes a route and answer with a 500 envelope."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error: method=%s path=%s datetime=%s bytes=%s",
                request.method,
                request.url.path,
                datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                request.headers.get("content-length", "0"),
            )
            return error_response(500, "internal server error")
