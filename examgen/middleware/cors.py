# examgen/middleware/cors.py
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

_BODY_HEADERS = ("content-length", "content-type")


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Starlette CORS with an empty preflight body.
    Status and Access-Control-* headers are Starlette's; only the "OK" text is dropped.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            k: v for k, v in response.headers.items()
            if k.lower() not in _BODY_HEADERS
        }
        return Response(status_code=response.status_code, headers=headers)
