from __future__ import annotations

"""Strongly-typed ``Basic`` strategies.

The identity type is the strategy: subclasses of :class:`TypeSafeHTTPBasic`
supply an ``id`` and a ``verify_password`` classmethod and inherit the full
``authenticate`` flow. No cache is kept here; a verifier that wants one
manages it itself.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Dict, Optional, Union

from .app.http import HttpRequest
from .basic import resolve
from .extraction import Credentials, extract_credentials
from .outcome import (
    Outcome,
    StatusCallback,
    Success,
    SuccessCallback,
    authenticate_with_callbacks,
    rejected,
    unconfigured,
)

logger = logging.getLogger("credentials_http.typesafe")


class TypeSafeHTTPBasic(ABC):
    """Contract for identities authenticated with HTTP ``Basic``.

    Implementations set ``id`` on their instances, may override ``realm``
    and ``provider``, and must implement ``verify_password`` returning an
    instance of the subclass (or an awaitable of one) on success and ``None``
    when the credentials are rejected.
    """

    realm: ClassVar[str] = "User"
    provider: ClassVar[str] = "HTTPBasic"

    id: str

    @classmethod
    @abstractmethod
    def verify_password(cls, userid: str, password: str) -> Any:
        """Return an instance for valid credentials, otherwise ``None``."""

    @classmethod
    async def authenticate(cls, request: HttpRequest, options: Optional[Dict[str, Any]] = None) -> Outcome:
        extracted = extract_credentials(request, cls.realm, url_requires_password=True)
        if not isinstance(extracted, Credentials):
            return extracted
        identity = await resolve(cls.verify_password(extracted.userid, extracted.password))
        if identity is None:
            logger.warning("rejected Basic credentials for %s in realm %s", extracted.userid, cls.realm)
            return rejected(cls.realm)
        logger.info("authenticated %s as %s", extracted.userid, cls.__name__)
        return Success(identity)

    @classmethod
    async def authenticate_with_callbacks(
        cls,
        request: HttpRequest,
        options: Optional[Dict[str, Any]],
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
    ) -> None:
        await authenticate_with_callbacks(cls, request, options, on_success, on_failure, on_pass)


UserVerifier = Callable[[str, str], Union[Optional["UserHTTPBasic"], Awaitable[Optional["UserHTTPBasic"]]]]


class UserHTTPBasic:
    """Ready-made typed identity whose settings live on the class.

    Assign ``UserHTTPBasic.verify_password`` (and optionally ``realm``)
    during application start-up. Until a verifier is assigned every
    attempt with well-formed credentials fails with 500.
    """

    realm: ClassVar[str] = "User"
    name: ClassVar[str] = "HTTP Basic"
    redirecting: ClassVar[bool] = False
    verify_password: ClassVar[Optional[UserVerifier]] = None

    def __init__(self, id: str, provider: str = "HTTPBasic") -> None:
        self.id = id
        self.provider = provider

    def __repr__(self) -> str:
        return f"UserHTTPBasic(id={self.id!r}, provider={self.provider!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserHTTPBasic):
            return NotImplemented
        return (self.id, self.provider) == (other.id, other.provider)

    def __hash__(self) -> int:
        return hash((self.id, self.provider))

    @staticmethod
    def describe() -> str:
        return "HTTPBasic"

    @classmethod
    async def authenticate(cls, request: HttpRequest, options: Optional[Dict[str, Any]] = None) -> Outcome:
        extracted = extract_credentials(request, cls.realm, url_requires_password=True)
        if not isinstance(extracted, Credentials):
            return extracted
        verifier = cls.verify_password
        if verifier is None:
            logger.error("UserHTTPBasic.verify_password is not assigned")
            return unconfigured()
        identity = await resolve(verifier(extracted.userid, extracted.password))
        if identity is None:
            logger.warning("rejected Basic credentials for %s in realm %s", extracted.userid, cls.realm)
            return rejected(cls.realm)
        return Success(identity)

    @classmethod
    async def authenticate_with_callbacks(
        cls,
        request: HttpRequest,
        options: Optional[Dict[str, Any]],
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
        in_progress: Optional[Callable[[], None]] = None,
    ) -> None:
        await authenticate_with_callbacks(cls, request, options, on_success, on_failure, on_pass, in_progress)


__all__ = ["TypeSafeHTTPBasic", "UserHTTPBasic", "UserVerifier"]
