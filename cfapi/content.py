"""Request and response content, independent of the HTTP library.

A request body classifies itself by calling exactly one method on a
:class:`ContentSerializer`; a response shape consumes a
:class:`ContentDeserializer`. Only :mod:`cfapi.transport` knows about httpx.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import TypeAdapter

from cfapi.errors import RequestError, UnknownContentError

T = TypeVar("T")
Ok = TypeVar("Ok")

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


class ContentType(str, enum.Enum):
    """Content types the Cloudflare API sends or accepts."""

    JSON = "application/json"
    JAVASCRIPT = "application/javascript"
    JAVASCRIPT_MODULE = "application/javascript+module"
    WASM = "application/wasm"
    FORM_DATA = "multipart/form-data"
    PLAIN_TEXT = "text/plain"
    OCTET_STREAM = "application/octet-stream"

    @property
    def mime(self) -> str:
        return self.value

    @classmethod
    def parse(cls, header: Optional[str]) -> Optional["ContentType"]:
        """Map a Content-Type header value to a known type, or None."""
        if not header:
            return None
        mime = header.split(";", 1)[0].strip().lower()
        if mime.startswith("text/plain"):
            return cls.PLAIN_TEXT
        for member in cls:
            if member.value == mime:
                return member
        return None


def encode_json(value: Any) -> bytes:
    """Encode a plain value or pydantic model as UTF-8 JSON, dropping None fields."""
    try:
        return _ANY_ADAPTER.dump_json(value, by_alias=True, exclude_none=True)
    except ValueError as exc:
        raise RequestError(f"failed to encode JSON content: {exc}") from exc


# ── Serialization ────────────────────────────────────────────────


class MultipartSerializer(ABC, Generic[Ok]):
    """Ordered builder for a multipart body: ``add_*`` calls, then ``end()``."""

    def add_json(self, value: Any, name: str, file_name: Optional[str] = None) -> "MultipartSerializer[Ok]":
        return self.add_content(encode_json(value), ContentType.JSON, name, file_name)

    def add_javascript(self, value: str, name: str, file_name: Optional[str] = None) -> "MultipartSerializer[Ok]":
        return self.add_content(_utf8(value), ContentType.JAVASCRIPT, name, file_name)

    def add_javascript_module(
        self, value: str, name: str, file_name: Optional[str] = None
    ) -> "MultipartSerializer[Ok]":
        return self.add_content(_utf8(value), ContentType.JAVASCRIPT_MODULE, name, file_name)

    def add_plain_text(self, value: str, name: str, file_name: Optional[str] = None) -> "MultipartSerializer[Ok]":
        return self.add_content(_utf8(value), ContentType.PLAIN_TEXT, name, file_name)

    def add_wasm(self, data: bytes, name: str, file_name: Optional[str] = None) -> "MultipartSerializer[Ok]":
        return self.add_content(data, ContentType.WASM, name, file_name)

    def add_octet_stream(self, data: bytes, name: str, file_name: Optional[str] = None) -> "MultipartSerializer[Ok]":
        return self.add_content(data, ContentType.OCTET_STREAM, name, file_name)

    @abstractmethod
    def add_content(
        self,
        data: bytes,
        content_type: ContentType,
        name: str,
        file_name: Optional[str] = None,
    ) -> "MultipartSerializer[Ok]":
        """Append one part and return the builder."""

    @abstractmethod
    def end(self) -> Ok:
        """Finish the multipart body."""


class ContentSerializer(ABC, Generic[Ok]):
    """Receives exactly one call describing a request body."""

    @abstractmethod
    def empty(self) -> Ok:
        ...

    @abstractmethod
    def json(self, value: Any) -> Ok:
        ...

    @abstractmethod
    def raw(self, data: bytes) -> Ok:
        ...

    @abstractmethod
    def multipart(self) -> MultipartSerializer[Ok]:
        ...


def _utf8(value: str) -> bytes:
    if not isinstance(value, str):
        raise RequestError(f"text content must be str, not {type(value).__name__}")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise RequestError(f"text content is not valid UTF-8: {exc}") from exc


def _binary(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise RequestError(f"binary content must be bytes, not {type(value).__name__}")
    return bytes(value)


# ── Request bodies ───────────────────────────────────────────────


class RequestBody:
    """A request body. Subclasses call one method on the serializer."""

    def serialize(self, serializer: ContentSerializer[Ok]) -> Ok:
        raise NotImplementedError


@dataclass(frozen=True)
class EmptyBody(RequestBody):
    def serialize(self, serializer: ContentSerializer[Ok]) -> Ok:
        return serializer.empty()


@dataclass(frozen=True)
class JsonBody(RequestBody):
    """A JSON body; ``value`` is anything pydantic can dump (models, dicts, lists)."""

    value: Any

    def serialize(self, serializer: ContentSerializer[Ok]) -> Ok:
        return serializer.json(self.value)


@dataclass(frozen=True)
class RawBody(RequestBody):
    data: bytes

    def serialize(self, serializer: ContentSerializer[Ok]) -> Ok:
        return serializer.raw(_binary(self.data))


@dataclass(frozen=True)
class MultipartPart:
    """One named part of a multipart body."""

    name: str
    value: Union[str, bytes, Any]
    content_type: ContentType
    file_name: Optional[str] = None

    @classmethod
    def json(cls, name: str, value: Any, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, value, ContentType.JSON, file_name)

    @classmethod
    def text(cls, name: str, value: str, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, value, ContentType.PLAIN_TEXT, file_name)

    @classmethod
    def javascript(cls, name: str, value: str, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, value, ContentType.JAVASCRIPT, file_name)

    @classmethod
    def javascript_module(cls, name: str, value: str, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, value, ContentType.JAVASCRIPT_MODULE, file_name)

    @classmethod
    def wasm(cls, name: str, data: bytes, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, data, ContentType.WASM, file_name)

    @classmethod
    def octet_stream(cls, name: str, data: bytes, file_name: Optional[str] = None) -> "MultipartPart":
        return cls(name, data, ContentType.OCTET_STREAM, file_name)

    @property
    def is_text(self) -> bool:
        return self.content_type in (
            ContentType.JSON,
            ContentType.PLAIN_TEXT,
            ContentType.JAVASCRIPT,
            ContentType.JAVASCRIPT_MODULE,
        )

    def add_to(self, serializer: MultipartSerializer[Ok]) -> MultipartSerializer[Ok]:
        if self.content_type is ContentType.JSON:
            return serializer.add_json(self.value, self.name, self.file_name)
        if self.is_text:
            return serializer.add_content(_utf8(self.value), self.content_type, self.name, self.file_name)
        return serializer.add_content(_binary(self.value), self.content_type, self.name, self.file_name)


@dataclass(frozen=True, init=False)
class MultipartBody(RequestBody):
    """Named parts, sent in declared order."""

    parts: Tuple[MultipartPart, ...]

    def __init__(self, parts: Iterable[MultipartPart] = ()) -> None:
        object.__setattr__(self, "parts", tuple(parts))

    def serialize(self, serializer: ContentSerializer[Ok]) -> Ok:
        builder = serializer.multipart()
        for part in self.parts:
            builder = part.add_to(builder)
        return builder.end()


# ── Deserialization ──────────────────────────────────────────────


class HeaderReader:
    """Read-only view over response headers."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self._headers = headers

    def get(self, name: str) -> Optional[str]:
        return self._headers.get(name)

    def expires(self) -> Optional[str]:
        return self._headers.get("expires")


class ContentDeserializer(ABC):
    """A fully buffered response, offered to a response shape for parsing."""

    @property
    @abstractmethod
    def status_code(self) -> int:
        ...

    @property
    @abstractmethod
    def headers(self) -> HeaderReader:
        ...

    @property
    @abstractmethod
    def content_type(self) -> Optional[ContentType]:
        ...

    @abstractmethod
    def plain_text(self) -> str:
        ...

    @abstractmethod
    def json(self, type_: Type[T]) -> T:
        """Parse the body as JSON into ``type_`` (anything pydantic can validate)."""

    @abstractmethod
    def octet_stream(self) -> bytes:
        ...

    def unknown(self) -> Exception:
        """Error to return when the content cannot be handled."""
        return UnknownContentError(self.status_code, self.headers.get("content-type"))
