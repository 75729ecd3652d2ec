from __future__ import annotations

"""HTTP primitives shared by the strategies and the handler chain.

Requests are plain data; the server that produces them and writes the
responses lives outside this package.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlsplit


@dataclass(slots=True)
class HttpRequest:
    method: str
    target: str
    path: str
    headers: Dict[str, str]

    @classmethod
    def from_target(cls, method: str, target: str, headers: Optional[Dict[str, str]] = None) -> "HttpRequest":
        return cls(
            method=method.upper(),
            target=target,
            path=urlsplit(target).path or "/",
            headers=dict(headers or {}),
        )

    @property
    def userinfo(self) -> Optional[str]:
        """The raw, still percent-encoded ``user:password`` part of an absolute-form target."""

        netloc = urlsplit(self.target).netloc
        if "@" not in netloc:
            return None
        return netloc.rpartition("@")[0]


@dataclass(slots=True)
class HttpResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def ensure_content_length(self) -> None:
        if "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(self.body))


class Handler:
    """Chain-of-responsibility handler interface."""

    def set_next(self, handler: "Handler") -> "Handler":
        raise NotImplementedError

    def handle(self, ctx: "RequestContext") -> HttpResponse:
        raise NotImplementedError


@dataclass(slots=True)
class RequestContext:
    """Mutable context passed across the handler chain."""

    request: HttpRequest
    identity: Optional[Any] = None


__all__ = [
    "Handler",
    "HttpRequest",
    "HttpResponse",
    "RequestContext",
]
