import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from dailyglow.core.logging import request_id_ctx_var, latency_bucket_ms

REQUEST_ID_HEADER = "x-request-id"

# Health checks hit these every few seconds; they still get a request id
QUIET_PATHS = frozenset({"/healthz", "/readyz"})


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate each request with an id and log one line when it completes."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER, quiet_paths=QUIET_PATHS):
        super().__init__(app)
        self.header_name = header_name
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request, call_next):
        rid = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx_var.reset(token)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[self.header_name] = rid
        if request.url.path not in self.quiet_paths:
            logging.getLogger("dailyglow").info(
                "request.complete",
                extra={
                    "request_id": rid,
                    "event_type": "request.complete",
                    "path": request.url.path,
                    "method": request.method,
                    "status": response.status_code,
                    "latency_bucket": latency_bucket_ms(elapsed_ms),
                },
            )
        return response
