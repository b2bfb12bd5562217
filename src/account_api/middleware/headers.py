"""Response header policy — one place decides what every response carries.

Learn: Gates don't write headers themselves. A gate that lets a request
through calls allow_cors(request), which flags the request; this
middleware reads the flag once the handler has produced a response.
A request a gate rejects (403/401) never gets the flag, so those
responses never advertise CORS. Once a gate has passed, the handler's
own errors (a 400 for a bad payload) still carry the CORS headers.

Always:
- X-Content-Type-Options: nosniff
- X-Frame-Options: DENY
- Referrer-Policy: strict-origin-when-cross-origin
- Strict-Transport-Security (HTTPS connections only)

Only after a gate passed:
- Access-Control-Allow-Origin: <settings.cors_origin>
- Access-Control-Allow-Headers: Content-Type

request.state lives in the ASGI scope, so the flag set by a dependency
deep inside the router is visible here.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

CORS_FLAG = "cors_allowed"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
HSTS = "max-age=31536000; includeSubDomains"


def allow_cors(request: Request) -> None:
    """Mark this request's response as eligible for the CORS headers."""
    setattr(request.state, CORS_FLAG, True)


def cors_allowed(request: Request) -> bool:
    return getattr(request.state, CORS_FLAG, False)


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Apply the security headers, and CORS where a gate allowed it."""

    def __init__(self, app: ASGIApp, cors_origin: str = "*"):
        super().__init__(app)
        self.cors_origin = cors_origin

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = HSTS
        if cors_allowed(request):
            response.headers["Access-Control-Allow-Origin"] = self.cors_origin
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response
