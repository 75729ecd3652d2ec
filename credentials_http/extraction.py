from __future__ import annotations

"""Credential extraction for the ``Basic`` scheme (RFC 7617).

Credentials embedded in the request URL win over the ``Authorization``
header. Anything that does not look like ``Basic`` credentials is a *pass*;
a decoded ``Basic`` payload without a colon is a *failure* (400).
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union
from urllib.parse import unquote

from .app.http import HttpRequest
from .outcome import Failure, Pass, bad_request, challenge

logger = logging.getLogger("credentials_http.extraction")

AUTHORIZATION = "Authorization"
SCHEME = "Basic"


@dataclass(frozen=True, slots=True)
class Credentials:
    userid: str
    password: str


def authorization_header(headers: Dict[str, str]) -> Optional[str]:
    value = headers.get(AUTHORIZATION)
    if value is None:
        # servers built on the pipeline normalise header names to lower case
        value = headers.get(AUTHORIZATION.lower())
    return value


def decode_basic(header: str) -> Optional[str]:
    """Return the decoded ``userid:password`` text or ``None`` if not ``Basic``."""

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != SCHEME:
        return None
    try:
        decoded = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError):
        return None
    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError:
        return None


def split_credentials(raw: str) -> Optional[Credentials]:
    # only the first two colon separated components are used
    components = raw.split(":")
    if len(components) < 2:
        return None
    return Credentials(components[0], components[1])


def split_userinfo(userinfo: str) -> Optional[Credentials]:
    """Split URL userinfo on ``:`` first, then percent-decode each component.

    An encoded ``%3A`` therefore stays part of the user or password.
    """

    credentials = split_credentials(userinfo)
    if credentials is None:
        return None
    return Credentials(unquote(credentials.userid), unquote(credentials.password))


def extract_credentials(
    request: HttpRequest,
    realm: str,
    *,
    url_requires_password: bool = False,
) -> Union[Credentials, Failure, Pass]:
    """Pull a ``Basic`` credential pair out of ``request``.

    With ``url_requires_password`` a URL carrying only a user name is
    ignored and the ``Authorization`` header is consulted instead.
    """

    userinfo = request.userinfo
    if userinfo is not None and url_requires_password and ":" not in userinfo:
        logger.debug("URL on %s %s names no password, using the header", request.method, request.path)
        userinfo = None

    if userinfo is not None:
        credentials = split_userinfo(userinfo)
    else:
        header = authorization_header(request.headers)
        if header is None:
            logger.debug("no Authorization header on %s %s", request.method, request.path)
            return challenge(realm)
        raw = decode_basic(header)
        if raw is None:
            logger.debug("Authorization header on %s %s is not Basic", request.method, request.path)
            return challenge(realm)
        credentials = split_credentials(raw)

    if credentials is None:
        logger.warning("malformed Basic credentials on %s %s", request.method, request.path)
        return bad_request()
    return credentials


__all__ = [
    "AUTHORIZATION",
    "Credentials",
    "authorization_header",
    "decode_basic",
    "extract_credentials",
    "split_credentials",
    "split_userinfo",
]
