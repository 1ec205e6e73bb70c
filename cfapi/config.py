"""Client configuration: target environment, timeout, default headers."""

from __future__ import annotations

import ipaddress
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

import httpx

CLIENT_API_V4_URI = "https://api.cloudflare.com/client/v4/"

DEFAULT_HTTP_TIMEOUT = 30.0


class Environment:
    """The API base URL requests are resolved against."""

    def __init__(self, base_url: Union[str, httpx.URL]) -> None:
        url = httpx.URL(str(base_url))
        if not url.scheme or not url.host:
            raise ValueError(f"environment URL must be absolute: {base_url!r}")
        # Relative endpoint paths must join *under* the base path.
        if not url.path.endswith("/"):
            url = url.copy_with(path=url.path + "/")
        self.base_url = url

    @classmethod
    def production(cls) -> "Environment":
        return cls(CLIENT_API_V4_URI)

    @classmethod
    def custom(cls, base_url: Union[str, httpx.URL]) -> "Environment":
        return cls(base_url)

    @property
    def is_production(self) -> bool:
        return str(self.base_url) == CLIENT_API_V4_URI

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self.base_url == other.base_url

    def __hash__(self) -> int:
        return hash(str(self.base_url))

    def __repr__(self) -> str:
        if self.is_production:
            return "Environment.production()"
        return f"Environment.custom({str(self.base_url)!r})"


@dataclass
class ClientConfig:
    """Settings for the underlying HTTP client.

    Attributes:
        http_timeout: Ceiling in seconds for each individual request.
        default_headers: Headers sent with every request.
        resolve_ip: Connect to this address instead of resolving the
            environment's hostname. The original hostname is still sent as
            ``Host`` and used for TLS SNI.
    """

    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    default_headers: Dict[str, str] = field(default_factory=dict)
    resolve_ip: Optional[str] = None

    def __post_init__(self) -> None:
        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")
        if self.resolve_ip is not None:
            # Normalizes and rejects anything that is not an IP literal.
            self.resolve_ip = str(ipaddress.ip_address(self.resolve_ip))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Read CLOUDFLARE_HTTP_TIMEOUT and CLOUDFLARE_RESOLVE_IP."""
        env = os.environ if environ is None else environ
        timeout = env.get("CLOUDFLARE_HTTP_TIMEOUT")
        return cls(
            http_timeout=float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT,
            resolve_ip=env.get("CLOUDFLARE_RESOLVE_IP") or None,
        )


def environment_from_env(environ: Optional[Mapping[str, str]] = None) -> Environment:
    """Production, unless CLOUDFLARE_API_BASE_URL points elsewhere."""
    env = os.environ if environ is None else environ
    base_url = env.get("CLOUDFLARE_API_BASE_URL")
    if base_url:
        return Environment.custom(base_url)
    return Environment.production()
