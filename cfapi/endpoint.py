"""Declarative description of one Cloudflare API operation.

Every API call is a small immutable value subclassing :class:`Endpoint`:

    @dataclass(frozen=True)
    class ZoneDetails(Endpoint[Zone]):
        method = Method.GET
        response_type = Zone

        identifier: str

        def path(self) -> str:
            return f"zones/{self.identifier}"

``path()``, ``query()``, ``body()`` and ``content_type()`` must be pure, so
the same endpoint value can be logged or sent again.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Dict, Generic, Mapping, Optional, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from cfapi.config import Environment
from cfapi.content import RequestBody

T = TypeVar("T")

# Characters left as-is in a KV key path segment, on top of ALPHA / DIGIT / "-._~".
# ":" and "@" are allowed in paths; "/", "%", "?", "#", brackets, braces,
# quotes, backtick, space, controls and non-ASCII are encoded.
_KEY_SAFE = "!$&'()*+,;=:@\\^|"


class Method(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class OrderDirection(str, enum.Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class SearchMatch(str, enum.Enum):
    """Whether a search must satisfy all requirements or at least one."""

    ALL = "all"
    ANY = "any"


class Endpoint(Generic[T]):
    """Base class for endpoint descriptors.

    Class attributes:
        method: HTTP method of the operation.
        response_type: type of ``result`` inside the JSON envelope.
        is_raw_body: when True the success body is returned as raw bytes and
            no envelope is parsed.
    """

    method: ClassVar[Method]
    response_type: ClassVar[Any] = Any
    is_raw_body: ClassVar[bool] = False

    def path(self) -> str:
        raise NotImplementedError

    def query(self) -> Optional[Dict[str, Any]]:
        return None

    def body(self) -> Optional[RequestBody]:
        return None

    def content_type(self) -> Optional[str]:
        """Content-Type override for the body. None derives it from the body kind."""
        return None

    def url(self, environment: Environment) -> httpx.URL:
        return environment.base_url.join(self.path())


def serialize_query(params: Any) -> Optional[Dict[str, Any]]:
    """Turn query params (pydantic model or mapping) into a dict without None values."""
    if params is None:
        return None
    if isinstance(params, BaseModel):
        data = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    elif isinstance(params, Mapping):
        data = {
            key: value.value if isinstance(value, enum.Enum) else value
            for key, value in params.items()
            if value is not None
        }
    else:
        raise TypeError(f"cannot serialize {type(params).__name__} as a query string")
    return data or None


def url_encode_key(key: str) -> str:
    """Percent-encode a KV key so it stays one path segment."""
    if key in (".", ".."):
        # Would otherwise be resolved as a dot segment when joined.
        return key.replace(".", "%2E")
    return quote(key, safe=_KEY_SAFE)
