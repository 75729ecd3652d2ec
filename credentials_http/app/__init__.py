"""Request pipeline that plugs authentication strategies into a handler chain."""

from .handlers import AuthHandler, build_handler, handle_request
from .http import Handler, HttpRequest, HttpResponse, RequestContext

__all__ = [
    "AuthHandler",
    "Handler",
    "HttpRequest",
    "HttpResponse",
    "RequestContext",
    "build_handler",
    "handle_request",
]
