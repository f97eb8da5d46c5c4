# examgen/middleware/request_context.py
import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from examgen.core.constants import HTTPHeaders
from examgen.middleware.error_handler import unhandled_exception_response

access_logger = logging.getLogger("access")

# Incoming header accepted in any casing; outgoing always X-Request-Id
HDR_OUT = HTTPHeaders.REQUEST_ID


def _get_req_id_from_headers(request: Request) -> Optional[str]:
    # Starlette headers are case-insensitive
    value = (request.headers.get(HDR_OUT) or "").strip()
    return value or None


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()

        trace_id = _get_req_id_from_headers(request) or str(uuid.uuid4())
        request.state.trace_id = trace_id

        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            # structured 500 rendered inside the CORS layer
            response = unhandled_exception_response(request, exc)
            return response
        finally:
            elapsed_ms = int((time.perf_counter() - start) * 1000)

            if response is not None:
                response.headers[HDR_OUT] = trace_id

                # readable from the browser (merged with existing value)
                expose = response.headers.get(HTTPHeaders.EXPOSE_HEADERS)
                if expose:
                    items = {h.strip() for h in expose.split(",") if h.strip()}
                    items.add(HDR_OUT)
                    response.headers[HTTPHeaders.EXPOSE_HEADERS] = ", ".join(sorted(items))
                else:
                    response.headers[HTTPHeaders.EXPOSE_HEADERS] = HDR_OUT

            access_logger.info(
                "request_done",
                extra={
                    "trace_id": trace_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status": getattr(response, "status_code", None),
                    "latency_ms": elapsed_ms,
                },
            )
