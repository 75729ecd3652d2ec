from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Identity produced by a ``CredentialsHTTPBasic`` verifier."""

    id: str
    display_name: str
    provider: str = "HTTPBasic"


__all__ = ["UserProfile"]
