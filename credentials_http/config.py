from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .basic import CredentialsHTTPBasic, VerifyPassword
from .cache import ProfileCache
from .errors import ConfigurationError
from .typesafe import UserHTTPBasic, UserVerifier


@dataclass
class BasicAuthConfig:
    realm: str
    cache_capacity: Optional[int]
    typed_realm: str

    def build_cache(self) -> ProfileCache:
        return ProfileCache(self.cache_capacity)

    def build_strategy(self, verify_password: VerifyPassword) -> CredentialsHTTPBasic:
        return CredentialsHTTPBasic(verify_password, realm=self.realm, cache=self.build_cache())

    def configure_user_basic(self, verify_password: UserVerifier) -> None:
        UserHTTPBasic.realm = self.typed_realm
        UserHTTPBasic.verify_password = verify_password


def _coerce_capacity(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"invalid cache size: {raw}") from exc
    if value <= 0:
        raise ConfigurationError(f"invalid cache size: {raw}")
    return value


def _realm(name: str, default: str) -> str:
    value = os.environ.get(name, default)
    if not value:
        raise ConfigurationError(f"{name} must not be empty")
    return value


def load_config() -> BasicAuthConfig:
    realm = _realm("CREDENTIALS_HTTP_REALM", "Users")
    typed_realm = _realm("CREDENTIALS_HTTP_TYPED_REALM", "User")
    cache_capacity = _coerce_capacity(os.environ.get("CREDENTIALS_HTTP_CACHE_SIZE"))
    return BasicAuthConfig(realm=realm, cache_capacity=cache_capacity, typed_realm=typed_realm)


__all__ = ["BasicAuthConfig", "load_config"]
