from __future__ import annotations

"""Terminal signals produced by an authentication attempt.

Every attempt ends in exactly one of :class:`Success`, :class:`Failure` or
:class:`Pass`. ``Failure`` stops the request; ``Pass`` means the request did
not carry ``Basic`` credentials and another strategy may try it.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Dict, Optional, Union

Headers = Dict[str, str]
SuccessCallback = Callable[[Any], None]
StatusCallback = Callable[[Optional[int], Optional[Headers]], None]

WWW_AUTHENTICATE = "WWW-Authenticate"


@dataclass(frozen=True, slots=True)
class Success:
    identity: Any

    def dispatch(
        self,
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
    ) -> None:
        on_success(self.identity)


@dataclass(frozen=True, slots=True)
class Failure:
    status: int
    headers: Optional[Headers] = None

    def dispatch(
        self,
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
    ) -> None:
        on_failure(self.status, self.headers)


@dataclass(frozen=True, slots=True)
class Pass:
    status: int
    headers: Optional[Headers] = None

    def dispatch(
        self,
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
    ) -> None:
        on_pass(self.status, self.headers)


Outcome = Union[Success, Failure, Pass]


async def authenticate_with_callbacks(
    strategy: Any,
    request: Any,
    options: Optional[Dict[str, Any]],
    on_success: SuccessCallback,
    on_failure: StatusCallback,
    on_pass: StatusCallback,
    in_progress: Optional[Callable[[], None]] = None,
) -> None:
    """Run ``strategy.authenticate`` and invoke exactly one of the callbacks.

    ``in_progress`` belongs to redirecting strategies; ``Basic`` never calls it.
    """

    outcome = await strategy.authenticate(request, options)
    outcome.dispatch(on_success, on_failure, on_pass)


def basic_challenge(realm: str) -> Headers:
    # realm is quoted verbatim; embedded quotes are not escaped
    return {WWW_AUTHENTICATE: 'Basic realm="' + realm + '"'}


def challenge(realm: str) -> Pass:
    """No usable ``Basic`` credentials; defer to the next strategy."""

    return Pass(int(HTTPStatus.UNAUTHORIZED), basic_challenge(realm))


def bad_request() -> Failure:
    return Failure(int(HTTPStatus.BAD_REQUEST), None)


def rejected(realm: str) -> Failure:
    return Failure(int(HTTPStatus.UNAUTHORIZED), basic_challenge(realm))


def caching_error() -> Failure:
    return Failure(int(HTTPStatus.INTERNAL_SERVER_ERROR), {WWW_AUTHENTICATE: "Internal caching error"})


def unconfigured() -> Failure:
    return Failure(int(HTTPStatus.INTERNAL_SERVER_ERROR), {WWW_AUTHENTICATE: "Internal server error"})


__all__ = [
    "Failure",
    "StatusCallback",
    "SuccessCallback",
    "Headers",
    "Outcome",
    "Pass",
    "Success",
    "WWW_AUTHENTICATE",
    "authenticate_with_callbacks",
    "bad_request",
    "basic_challenge",
    "caching_error",
    "challenge",
    "rejected",
    "unconfigured",
]
