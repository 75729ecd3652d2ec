from __future__ import annotations

"""Handler chain that puts authentication strategies in front of an application."""

import asyncio
import json
import logging
import time
from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable, Optional, Protocol

from ..outcome import Headers, Outcome, Pass, Success
from .http import Handler, HttpRequest, HttpResponse, RequestContext

access_logger = logging.getLogger("credentials_http.access")
logger = logging.getLogger("credentials_http.handlers")

Application = Callable[[RequestContext], HttpResponse]


class Strategy(Protocol):
    async def authenticate(self, request: HttpRequest, options: Optional[Dict[str, Any]] = None) -> Outcome:
        """Authenticate ``request`` and return exactly one outcome."""


def json_response(status: HTTPStatus | int, data: Dict[str, Any], headers: Optional[Headers] = None) -> HttpResponse:
    body = json.dumps(data).encode()
    response = HttpResponse(int(status), {"Content-Type": "application/json"}, body)
    if headers:
        response.headers.update(headers)
    response.ensure_content_length()
    return response


def status_error(status: int, headers: Optional[Headers] = None) -> HttpResponse:
    """JSON error body carrying the reason phrase; the strategy's headers ride along."""

    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        phrase = "Error"
    return json_response(status, {"error": phrase}, headers)


class AbstractHandler(Handler):
    def __init__(self) -> None:
        self._next: Optional[Handler] = None

    def set_next(self, handler: Handler) -> Handler:
        self._next = handler
        return handler

    def _handle_next(self, ctx: RequestContext) -> HttpResponse:
        if self._next is None:
            return status_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        return self._next.handle(ctx)


class ErrorHandler(AbstractHandler):
    def handle(self, ctx: RequestContext) -> HttpResponse:
        try:
            return self._handle_next(ctx)
        except Exception:  # noqa: BLE001
            logger.exception("unhandled error on %s %s", ctx.request.method, ctx.request.path)
            return status_error(HTTPStatus.INTERNAL_SERVER_ERROR)


class LoggingHandler(AbstractHandler):
    def handle(self, ctx: RequestContext) -> HttpResponse:
        start = time.monotonic()
        response = self._handle_next(ctx)
        entry = {
            "method": ctx.request.method,
            "path": ctx.request.path,
            "status": int(response.status),
            "ms": round((time.monotonic() - start) * 1000, 1),
            "user": getattr(ctx.identity, "id", None),
        }
        access_logger.info(json.dumps(entry, separators=(",", ":")))
        return response


class AuthHandler(AbstractHandler):
    """Runs the registered strategies in order before the rest of the chain.

    The first ``Success`` or ``Failure`` decides the request. A ``Pass``
    hands the request to the next strategy; when all of them pass, the
    response carries the last pass status and every challenge header seen.
    """

    def __init__(self, strategies: Iterable[Strategy]) -> None:
        super().__init__()
        self._strategies = list(strategies)

    async def _authenticate(self, request: HttpRequest) -> Outcome:
        status = int(HTTPStatus.UNAUTHORIZED)
        headers: Headers = {}
        for strategy in self._strategies:
            outcome = await strategy.authenticate(request)
            if not isinstance(outcome, Pass):
                return outcome
            status = outcome.status
            for name, value in (outcome.headers or {}).items():
                # several challenges for one header are joined as a list
                headers[name] = f"{headers[name]}, {value}" if name in headers else value
        return Pass(status, headers)

    def handle(self, ctx: RequestContext) -> HttpResponse:
        outcome = asyncio.run(self._authenticate(ctx.request))
        if isinstance(outcome, Success):
            ctx.identity = outcome.identity
            return self._handle_next(ctx)
        return status_error(outcome.status, outcome.headers)


class ApplicationHandler(AbstractHandler):
    """End of the chain: hands the authenticated context to the application."""

    def __init__(self, application: Application) -> None:
        super().__init__()
        self._application = application

    def handle(self, ctx: RequestContext) -> HttpResponse:
        return self._application(ctx)


def build_handler(strategies: Iterable[Strategy], application: Application) -> Handler:
    """Wire logging, error mapping and authentication in front of ``application``."""

    logging_handler = LoggingHandler()
    logging_handler.set_next(ErrorHandler()).set_next(AuthHandler(strategies)).set_next(
        ApplicationHandler(application)
    )
    return logging_handler


def handle_request(entry: Handler, request: HttpRequest) -> HttpResponse:
    return entry.handle(RequestContext(request=request))


__all__ = [
    "AbstractHandler",
    "ApplicationHandler",
    "AuthHandler",
    "ErrorHandler",
    "LoggingHandler",
    "Strategy",
    "build_handler",
    "handle_request",
    "json_response",
    "status_error",
]
