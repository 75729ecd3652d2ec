"""HTTP ``Basic`` authentication strategies for a middleware chain."""

from .basic import CredentialsHTTPBasic
from .cache import ProfileCache, cache_key
from .config import BasicAuthConfig, load_config
from .errors import ConfigurationError, CredentialsError
from .extraction import Credentials, extract_credentials
from .outcome import Failure, Outcome, Pass, Success
from .profile import UserProfile
from .typesafe import TypeSafeHTTPBasic, UserHTTPBasic

__all__ = [
    "BasicAuthConfig",
    "ConfigurationError",
    "Credentials",
    "CredentialsError",
    "CredentialsHTTPBasic",
    "Failure",
    "Outcome",
    "Pass",
    "ProfileCache",
    "Success",
    "TypeSafeHTTPBasic",
    "UserHTTPBasic",
    "UserProfile",
    "cache_key",
    "extract_credentials",
    "load_config",
]
