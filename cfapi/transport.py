"""httpx adaptation of the content model, shared by both clients.

Building a request and reading a response involve no I/O, so
:func:`build_request` and :class:`HttpxContentDeserializer` serve the
blocking and the async client alike; only ``send`` differs.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter

from cfapi.auth import Credentials
from cfapi.config import ClientConfig, Environment
from cfapi.content import (
    ContentDeserializer,
    ContentSerializer,
    ContentType,
    HeaderReader,
    MultipartSerializer,
    encode_json,
)
from cfapi.endpoint import Endpoint
from cfapi.errors import RequestError

T = TypeVar("T")

FileField = Tuple[str, Tuple[Optional[str], bytes, str]]

HttpClient = Union[httpx.Client, httpx.AsyncClient]


@dataclass(frozen=True)
class RequestPayload:
    """What a serialized body contributes to the request."""

    content: Optional[bytes] = None
    files: Optional[List[FileField]] = None
    content_type: Optional[str] = None

    @property
    def is_multipart(self) -> bool:
        return self.files is not None


class HttpxMultipartSerializer(MultipartSerializer[RequestPayload]):
    def __init__(self) -> None:
        self._files: List[FileField] = []

    def add_content(
        self,
        data: bytes,
        content_type: ContentType,
        name: str,
        file_name: Optional[str] = None,
    ) -> "HttpxMultipartSerializer":
        self._files.append((name, (file_name, data, content_type.mime)))
        return self

    def end(self) -> RequestPayload:
        if not self._files:
            # httpx only produces a multipart body when it has fields.
            boundary = secrets.token_hex(16)
            return RequestPayload(
                content=f"--{boundary}--\r\n".encode("ascii"),
                content_type=f"{ContentType.FORM_DATA.mime}; boundary={boundary}",
            )
        return RequestPayload(files=list(self._files))


class HttpxContentSerializer(ContentSerializer[RequestPayload]):
    def empty(self) -> RequestPayload:
        return RequestPayload()

    def json(self, value: Any) -> RequestPayload:
        return RequestPayload(content=encode_json(value), content_type=ContentType.JSON.mime)

    def raw(self, data: bytes) -> RequestPayload:
        return RequestPayload(content=bytes(data), content_type=ContentType.OCTET_STREAM.mime)

    def multipart(self) -> HttpxMultipartSerializer:
        return HttpxMultipartSerializer()


class HttpxContentDeserializer(ContentDeserializer):
    """Wraps an ``httpx.Response`` whose body has already been read."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._headers = HeaderReader(response.headers)

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> HeaderReader:
        return self._headers

    @property
    def content_type(self) -> Optional[ContentType]:
        return ContentType.parse(self._response.headers.get("content-type"))

    def plain_text(self) -> str:
        return self._response.content.decode("utf-8")

    def json(self, type_: Type[T]) -> T:
        return TypeAdapter(type_).validate_json(self._response.content)

    def octet_stream(self) -> bytes:
        return self._response.content


def build_request(
    http_client: HttpClient,
    endpoint: Endpoint[Any],
    credentials: Credentials,
    environment: Environment,
    config: ClientConfig,
) -> httpx.Request:
    """Turn an endpoint into an ``httpx.Request``. Raises RequestError, never sends."""
    try:
        url = endpoint.url(environment)
        query = endpoint.query()
        body = endpoint.body()
        payload = body.serialize(HttpxContentSerializer()) if body is not None else RequestPayload()

        headers = httpx.Headers(credentials.headers())
        content_type = endpoint.content_type()
        # Multipart keeps the Content-Type httpx writes with its own boundary.
        overridable = not payload.is_multipart and body is not None
        if overridable and content_type and content_type != ContentType.FORM_DATA.mime:
            headers["Content-Type"] = content_type
        elif not payload.is_multipart and payload.content_type:
            headers["Content-Type"] = payload.content_type
    except (ValueError, TypeError, httpx.InvalidURL) as exc:
        raise RequestError(f"cannot build {type(endpoint).__name__}: {exc}") from exc

    extensions = {}
    if config.resolve_ip and url.host == environment.base_url.host:
        headers["Host"] = url.netloc.decode("ascii")
        extensions["sni_hostname"] = url.host
        url = url.copy_with(host=config.resolve_ip)

    try:
        return http_client.build_request(
            endpoint.method.value,
            url,
            params=query,
            headers=headers,
            content=payload.content,
            files=payload.files,
            extensions=extensions,
        )
    except (ValueError, TypeError, httpx.InvalidURL) as exc:
        raise RequestError(f"cannot build {type(endpoint).__name__}: {exc}") from exc
