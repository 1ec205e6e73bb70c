"""Credentials for the Cloudflare API and the headers they render to."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

Header = Tuple[str, str]


def _require(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    if not value.isascii() or "\r" in value or "\n" in value:
        # Rendered verbatim into an HTTP header.
        raise ValueError(f"{name} must be ASCII without line breaks")


class Credentials:
    """Base class for the three supported authentication schemes."""

    def headers(self) -> List[Header]:
        raise NotImplementedError


@dataclass(frozen=True)
class UserAuthKey(Credentials):
    """Global API key, sent as ``X-Auth-Email`` and ``X-Auth-Key``."""

    email: str
    key: str = field(repr=False)

    def __post_init__(self) -> None:
        _require("email", self.email)
        _require("key", self.key)

    def headers(self) -> List[Header]:
        return [("X-Auth-Email", self.email), ("X-Auth-Key", self.key)]


@dataclass(frozen=True)
class UserAuthToken(Credentials):
    """API token, sent as ``Authorization: Bearer <token>``."""

    token: str = field(repr=False)

    def __post_init__(self) -> None:
        _require("token", self.token)

    def headers(self) -> List[Header]:
        return [("Authorization", f"Bearer {self.token}")]


@dataclass(frozen=True)
class ServiceKey(Credentials):
    """Origin CA service key, sent as ``X-Auth-User-Service-Key``."""

    key: str = field(repr=False)

    def __post_init__(self) -> None:
        _require("key", self.key)

    def headers(self) -> List[Header]:
        return [("X-Auth-User-Service-Key", self.key)]


def credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Build credentials from ``CLOUDFLARE_*`` environment variables.

    Precedence: CLOUDFLARE_API_TOKEN > CLOUDFLARE_EMAIL + CLOUDFLARE_API_KEY
    > CLOUDFLARE_SERVICE_KEY.
    """
    env = os.environ if environ is None else environ
    token = env.get("CLOUDFLARE_API_TOKEN")
    if token:
        return UserAuthToken(token)
    email = env.get("CLOUDFLARE_EMAIL")
    key = env.get("CLOUDFLARE_API_KEY")
    if email and key:
        return UserAuthKey(email, key)
    service_key = env.get("CLOUDFLARE_SERVICE_KEY")
    if service_key:
        return ServiceKey(service_key)
    raise ValueError(
        "no Cloudflare credentials configured: set CLOUDFLARE_API_TOKEN, "
        "CLOUDFLARE_EMAIL and CLOUDFLARE_API_KEY, or CLOUDFLARE_SERVICE_KEY"
    )
