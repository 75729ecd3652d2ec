from __future__ import annotations


class CredentialsError(Exception):
    """Base class for errors raised by :mod:`credentials_http`."""


class ConfigurationError(CredentialsError):
    """A strategy or its configuration was assembled incorrectly."""


__all__ = ["CredentialsError", "ConfigurationError"]
