"""Response envelopes and the mapping from an HTTP response to an ApiResponse.

Success: {"result": ..., "result_info": ..., "messages": [...], "errors": [], "success": true}
Failure: {"errors": [{"code": ..., "message": ...}, ...], "success": false}
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from cfapi.content import ContentDeserializer, ContentType
from cfapi.endpoint import Endpoint
from cfapi.errors import ApiFailure, HttpError, Invalid, UnknownContentError

T = TypeVar("T")


class ApiError(BaseModel):
    """One entry of an ``errors`` list.

    Unknown fields are kept in ``other``; equality only looks at
    ``code`` and ``message``.
    """

    model_config = ConfigDict(extra="allow")

    code: int
    message: str

    @property
    def other(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.code, self.message))


class ApiErrors(BaseModel):
    """The error envelope. Equality only looks at ``errors``."""

    model_config = ConfigDict(extra="allow")

    errors: List[ApiError] = Field(default_factory=list)

    @property
    def other(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ApiErrors):
            return NotImplemented
        return self.errors == other.errors

    def __hash__(self) -> int:
        return hash(tuple(self.errors))


class ApiSuccess(BaseModel, Generic[T]):
    """The success envelope around an endpoint's ``result``."""

    model_config = ConfigDict(extra="allow")

    result: T
    result_info: Optional[Any] = None
    messages: Any = Field(default_factory=list)
    errors: List[ApiError] = Field(default_factory=list)

    @classmethod
    def deserialize(cls, deserializer: ContentDeserializer) -> "ApiSuccess[T]":
        if deserializer.content_type not in (ContentType.JSON, None):
            raise deserializer.unknown()
        return deserializer.json(cls)


class RawResponse:
    """Response shape for endpoints whose body is returned as bytes."""

    @staticmethod
    def deserialize(deserializer: ContentDeserializer) -> bytes:
        if deserializer.content_type not in (ContentType.OCTET_STREAM, None):
            raise deserializer.unknown()
        return deserializer.octet_stream()


class TextResponse:
    """Response shape for plain text bodies."""

    @staticmethod
    def deserialize(deserializer: ContentDeserializer) -> str:
        if deserializer.content_type is not ContentType.PLAIN_TEXT:
            raise deserializer.unknown()
        return deserializer.plain_text()


class ApiResponse(Generic[T]):
    """Outcome of one request: either a value or an :class:`ApiFailure`.

    Usage::

        resp = client.request(ZoneDetails(identifier="023e105f4ecef8ad9ca31a8372d0c353"))
        if resp.is_ok:
            print(resp.value.result.name)
        elif isinstance(resp.failure, HttpError):
            print(resp.failure.status_code, resp.failure.errors)
    """

    __slots__ = ("_value", "_failure")

    def __init__(self, value: Optional[T] = None, failure: Optional[ApiFailure] = None) -> None:
        self._value = value
        self._failure = failure

    @classmethod
    def ok(cls, value: T) -> "ApiResponse[T]":
        return cls(value=value)

    @classmethod
    def err(cls, failure: ApiFailure) -> "ApiResponse[T]":
        return cls(failure=failure)

    @property
    def is_ok(self) -> bool:
        return self._failure is None

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def failure(self) -> Optional[ApiFailure]:
        return self._failure

    def unwrap(self) -> T:
        """Return the value, or raise the failure."""
        if self._failure is not None:
            raise self._failure
        return self._value  # type: ignore[return-value]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ApiResponse):
            return NotImplemented
        return self._value == other._value and self._failure == other._failure

    def __hash__(self) -> int:
        return hash((self.is_ok, self._failure))

    def __repr__(self) -> str:
        if self._failure is not None:
            return f"ApiResponse.err({self._failure!r})"
        return f"ApiResponse.ok({self._value!r})"


def parse_errors(deserializer: ContentDeserializer) -> ApiErrors:
    """Parse the error envelope, or return an empty one if the body doesn't fit."""
    try:
        return deserializer.json(ApiErrors)
    except ValueError:
        return ApiErrors()


def map_response(
    endpoint: Endpoint[Any], deserializer: ContentDeserializer
) -> ApiResponse[Union[ApiSuccess[Any], bytes]]:
    """Turn a received response into the endpoint's result.

    2xx and parses -> ok; 2xx and doesn't parse -> Invalid; anything else
    -> HttpError with whatever error envelope could be read.
    """
    status = deserializer.status_code
    if not 200 <= status < 300:
        return ApiResponse.err(HttpError(status, parse_errors(deserializer)))
    try:
        if endpoint.is_raw_body:
            return ApiResponse.ok(RawResponse.deserialize(deserializer))
        envelope = ApiSuccess[endpoint.response_type]  # type: ignore[name-defined]
        return ApiResponse.ok(envelope.deserialize(deserializer))
    except (ValueError, UnknownContentError) as exc:
        return ApiResponse.err(Invalid(exc))
