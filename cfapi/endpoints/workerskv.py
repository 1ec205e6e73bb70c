"""Workers KV: namespaces and the key-value pairs stored in them.

Keys are arbitrary strings and are percent-encoded before they are put in a
path; a key such as ``a/b?c`` stays one path segment.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from cfapi.content import JsonBody, MultipartBody, MultipartPart, RawBody, RequestBody
from cfapi.endpoint import Endpoint, Method, OrderDirection, serialize_query, url_encode_key

# ── Models ───────────────────────────────────────────────────────


class WorkersKvNamespace(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    supports_url_encoding: Optional[bool] = None


class Key(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    # Sent as seconds since the UNIX epoch; omitted for keys that never expire.
    expiration: Optional[datetime] = None
    metadata: Optional[Any] = None


class WorkersKvBulkResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    successful_key_count: Optional[int] = None
    unsuccessful_keys: Optional[List[str]] = None


class KeyValuePair(BaseModel):
    """One entry of a bulk write."""

    key: str
    value: str
    expiration: Optional[int] = None
    expiration_ttl: Optional[int] = None
    metadata: Optional[Any] = None
    base64: Optional[bool] = None


# ── Params ───────────────────────────────────────────────────────


class ListNamespacesOrder(str, enum.Enum):
    ID = "id"
    TITLE = "title"


class ListNamespacesParams(BaseModel):
    page: Optional[int] = None
    per_page: Optional[int] = None
    order: Optional[ListNamespacesOrder] = None
    direction: Optional[OrderDirection] = None


class ListNamespaceKeysParams(BaseModel):
    limit: Optional[int] = None
    cursor: Optional[str] = None
    prefix: Optional[str] = None


class WriteKeyParams(BaseModel):
    expiration: Optional[int] = None
    expiration_ttl: Optional[int] = None


def _namespaces(account_identifier: str) -> str:
    return f"accounts/{account_identifier}/storage/kv/namespaces"


# ── Namespaces ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ListNamespaces(Endpoint[List[WorkersKvNamespace]]):
    method = Method.GET
    response_type = List[WorkersKvNamespace]

    account_identifier: str
    params: ListNamespacesParams = field(default_factory=ListNamespacesParams)

    def path(self) -> str:
        return _namespaces(self.account_identifier)

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)


@dataclass(frozen=True)
class CreateNamespace(Endpoint[WorkersKvNamespace]):
    method = Method.POST
    response_type = WorkersKvNamespace

    account_identifier: str
    title: str

    def path(self) -> str:
        return _namespaces(self.account_identifier)

    def body(self) -> Optional[RequestBody]:
        return JsonBody({"title": self.title})


@dataclass(frozen=True)
class GetNamespace(Endpoint[WorkersKvNamespace]):
    method = Method.GET
    response_type = WorkersKvNamespace

    account_identifier: str
    namespace_identifier: str

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"


@dataclass(frozen=True)
class RenameNamespace(Endpoint[Any]):
    method = Method.PUT

    account_identifier: str
    namespace_identifier: str
    title: str

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"

    def body(self) -> Optional[RequestBody]:
        return JsonBody({"title": self.title})


@dataclass(frozen=True)
class RemoveNamespace(Endpoint[Any]):
    method = Method.DELETE

    account_identifier: str
    namespace_identifier: str

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"


# ── Keys and values ──────────────────────────────────────────────


@dataclass(frozen=True)
class ListNamespaceKeys(Endpoint[List[Key]]):
    method = Method.GET
    response_type = List[Key]

    account_identifier: str
    namespace_identifier: str
    params: ListNamespaceKeysParams = field(default_factory=ListNamespaceKeysParams)

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}/keys"

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)


@dataclass(frozen=True)
class ReadKey(Endpoint[bytes]):
    """The stored value, returned as raw bytes.

    If the pair expires, the server reports when in the ``expiration``
    response header.
    """

    method = Method.GET
    is_raw_body = True

    account_identifier: str
    namespace_identifier: str
    key: str

    def path(self) -> str:
        return (
            f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"
            f"/values/{url_encode_key(self.key)}"
        )


@dataclass(frozen=True)
class ReadKeyMetadata(Endpoint[Any]):
    method = Method.GET

    account_identifier: str
    namespace_identifier: str
    key: str

    def path(self) -> str:
        return (
            f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"
            f"/metadata/{url_encode_key(self.key)}"
        )


@dataclass(frozen=True)
class WriteKey(Endpoint[Any]):
    """Store a value, optionally with JSON metadata.

    Without metadata the value is sent as ``application/octet-stream``;
    with metadata both go as form parts, ``metadata`` first, then ``value``.
    """

    method = Method.PUT

    account_identifier: str
    namespace_identifier: str
    key: str
    value: bytes
    metadata: Optional[Any] = None
    params: WriteKeyParams = field(default_factory=WriteKeyParams)

    def path(self) -> str:
        return (
            f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"
            f"/values/{url_encode_key(self.key)}"
        )

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)

    def body(self) -> Optional[RequestBody]:
        if self.metadata is None:
            return RawBody(self.value)
        return MultipartBody(
            [
                MultipartPart.json("metadata", self.metadata),
                MultipartPart.octet_stream("value", self.value),
            ]
        )


@dataclass(frozen=True)
class DeleteKey(Endpoint[Any]):
    method = Method.DELETE

    account_identifier: str
    namespace_identifier: str
    key: str

    def path(self) -> str:
        return (
            f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}"
            f"/values/{url_encode_key(self.key)}"
        )


@dataclass(frozen=True)
class WriteBulk(Endpoint[WorkersKvBulkResult]):
    """Write up to 10,000 pairs at once."""

    method = Method.PUT
    response_type = WorkersKvBulkResult

    account_identifier: str
    namespace_identifier: str
    bulk_key_value_pairs: List[KeyValuePair]

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}/bulk"

    def body(self) -> Optional[RequestBody]:
        return JsonBody(list(self.bulk_key_value_pairs))


@dataclass(frozen=True)
class DeleteBulk(Endpoint[WorkersKvBulkResult]):
    """Delete up to 10,000 keys at once. Unknown namespaces answer 404."""

    method = Method.DELETE
    response_type = WorkersKvBulkResult

    account_identifier: str
    namespace_identifier: str
    bulk_keys: List[str]

    def path(self) -> str:
        return f"{_namespaces(self.account_identifier)}/{self.namespace_identifier}/bulk"

    def body(self) -> Optional[RequestBody]:
        return JsonBody(list(self.bulk_keys))
