"""
Audit Middleware - Request/response logging for monitoring.

Every request gets a request id (taken from X-Request-ID when the caller
sends one) that is echoed back and included in the audit line. AI routes
are logged with the rate-limit budget left for the client and whether a
bearer token was presented, so quota use can be traced per caller.
"""
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from acns.core.logging_config import get_logger

logger = get_logger(__name__)

QUIET_PATHS = ("/health", "/health/ready")
AI_PREFIX = "/api/ai"
REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def _request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return uuid.uuid4().hex


class AuditMiddleware(BaseHTTPMiddleware):
    """Logs one audit line per request and tags the response with its id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        request_id = _request_id(request)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{request_id}] FAILED {request.method} {request.url.path} "
                f"after {time.perf_counter() - start_time:.3f}s: {e}"
            )
            raise

        duration = time.perf_counter() - start_time
        self._log_request(request, request_id, response, duration)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response

    def _log_request(
        self,
        request: Request,
        request_id: str,
        response: Response,
        duration: float,
    ) -> None:
        path = request.url.path
        status_code = response.status_code

        if path in QUIET_PATHS:
            logger.debug(f"[{request_id}] {path} -> {status_code}")
            return

        client_ip = request.client.host if request.client else "unknown"
        line = (
            f"[{request_id}] {request.method} {path} -> {status_code} "
            f"{duration:.3f}s client={client_ip}"
        )

        if path.startswith(AI_PREFIX):
            remaining: Optional[str] = response.headers.get("X-RateLimit-Remaining")
            has_token = "authorization" in request.headers
            line += f" ai_budget={remaining or '-'} token={'yes' if has_token else 'no'}"

        if status_code >= 500:
            logger.error(line)
        elif status_code == 429:
            logger.warning(f"{line} (rate limited)")
        elif status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to all responses.

    AI responses are additionally marked no-store: they can quote
    admin-only drafts and per-session conversation content.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.path.startswith(AI_PREFIX):
            response.headers["Cache-Control"] = "no-store"

        return response
