from __future__ import annotations

"""Loosely-typed ``Basic`` strategy producing :class:`UserProfile` identities."""

import inspect
import logging
import warnings
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Union

from .app.http import HttpRequest
from .cache import ProfileCache, cache_key
from .errors import ConfigurationError
from .extraction import Credentials, extract_credentials
from .outcome import (
    Outcome,
    StatusCallback,
    Success,
    SuccessCallback,
    authenticate_with_callbacks,
    caching_error,
    rejected,
    unconfigured,
)
from .profile import UserProfile

logger = logging.getLogger("credentials_http.basic")

DEFAULT_REALM = "Users"

LoadedProfile = Optional[Tuple[Optional[UserProfile], Optional[str]]]
UserProfileLoader = Callable[[str], Union[LoadedProfile, Awaitable[LoadedProfile]]]
VerifyPassword = Callable[[str, str], Union[Optional[UserProfile], Awaitable[Optional[UserProfile]]]]


@dataclass(frozen=True, slots=True)
class Unconfigured:
    pass


@dataclass(frozen=True, slots=True)
class LegacyLoader:
    load: UserProfileLoader


@dataclass(frozen=True, slots=True)
class PasswordVerifier:
    verify: VerifyPassword


Verification = Union[Unconfigured, LegacyLoader, PasswordVerifier]


async def resolve(result: Any) -> Any:
    """Await ``result`` when the callback handed back an awaitable."""

    if inspect.isawaitable(result):
        return await result
    return result


class CredentialsHTTPBasic:
    """Authenticate requests using HTTP ``Basic`` authentication.

    Exactly one of ``verify_password`` and the deprecated
    ``user_profile_loader`` may be given. ``verify_password(userid, password)``
    returns the profile or ``None``. ``user_profile_loader(userid)`` returns
    ``(profile, stored_password)`` and the strategy compares the stored
    password itself with a plain equality check; it is kept only for legacy
    callers.

    ``users_cache`` must be assigned before requests arrive: without it every
    attempt with well-formed credentials fails with 500.
    """

    name = "HTTPBasic"
    redirecting = False

    def __init__(
        self,
        verify_password: Optional[VerifyPassword] = None,
        *,
        user_profile_loader: Optional[UserProfileLoader] = None,
        realm: Optional[str] = None,
        cache: Optional[ProfileCache] = None,
    ) -> None:
        if verify_password is not None and user_profile_loader is not None:
            raise ConfigurationError("pass either verify_password or user_profile_loader, not both")
        if user_profile_loader is not None:
            warnings.warn(
                "user_profile_loader is deprecated for Basic authentication; use verify_password",
                DeprecationWarning,
                stacklevel=2,
            )
            self._verification: Verification = LegacyLoader(user_profile_loader)
        elif verify_password is not None:
            self._verification = PasswordVerifier(verify_password)
        else:
            self._verification = Unconfigured()
        self.realm: str = realm if realm is not None else DEFAULT_REALM
        self.users_cache: Optional[ProfileCache] = cache

    async def authenticate(self, request: HttpRequest, options: Optional[Dict[str, Any]] = None) -> Outcome:
        extracted = extract_credentials(request, self.realm)
        if not isinstance(extracted, Credentials):
            return extracted
        userid, password = extracted.userid, extracted.password

        if self.users_cache is None:
            logger.error("no users cache assigned to %s strategy", self.name)
            return caching_error()

        key = cache_key(userid, password)
        cached = self.users_cache.lookup(key)
        if cached is not None:
            logger.debug("cache hit for %s", userid)
            return Success(cached)

        verification = self._verification
        if isinstance(verification, LegacyLoader):
            loaded = await resolve(verification.load(userid))
            profile, stored_password = loaded if loaded is not None else (None, None)
            if profile is None or stored_password is None or stored_password != password:
                profile = None
        elif isinstance(verification, PasswordVerifier):
            profile = await resolve(verification.verify(userid, password))
        else:
            logger.error("%s strategy has neither verify_password nor user_profile_loader", self.name)
            return unconfigured()

        if profile is None:
            logger.warning("rejected Basic credentials for %s in realm %s", userid, self.realm)
            return rejected(self.realm)

        # the cache may have been unassigned while the verifier ran
        users_cache = self.users_cache
        if users_cache is None:
            logger.error("users cache removed from %s strategy during verification", self.name)
            return caching_error()
        users_cache.store(key, profile)
        logger.info("authenticated %s in realm %s", userid, self.realm)
        return Success(profile)

    async def authenticate_with_callbacks(
        self,
        request: HttpRequest,
        options: Optional[Dict[str, Any]],
        on_success: SuccessCallback,
        on_failure: StatusCallback,
        on_pass: StatusCallback,
        in_progress: Optional[Callable[[], None]] = None,
    ) -> None:
        await authenticate_with_callbacks(self, request, options, on_success, on_failure, on_pass, in_progress)


__all__ = [
    "CredentialsHTTPBasic",
    "DEFAULT_REALM",
    "LegacyLoader",
    "PasswordVerifier",
    "Unconfigured",
    "UserProfileLoader",
    "Verification",
    "VerifyPassword",
    "resolve",
]
