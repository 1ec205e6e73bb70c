"""DNS records of a zone."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from cfapi.content import JsonBody, RequestBody
from cfapi.endpoint import Endpoint, Method, OrderDirection, SearchMatch, serialize_query


# ── Record content ───────────────────────────────────────────────
# The API flattens the record type and its content into the record itself,
# e.g. {"name": "www", "type": "A", "content": "198.51.100.4", "ttl": 1}.


class ARecord(BaseModel):
    type: Literal["A"] = "A"
    content: IPv4Address


class AAAARecord(BaseModel):
    type: Literal["AAAA"] = "AAAA"
    content: IPv6Address


class CNAMERecord(BaseModel):
    type: Literal["CNAME"] = "CNAME"
    content: str


class NSRecord(BaseModel):
    type: Literal["NS"] = "NS"
    content: str


class MXRecord(BaseModel):
    type: Literal["MX"] = "MX"
    content: str
    priority: int


class TXTRecord(BaseModel):
    type: Literal["TXT"] = "TXT"
    content: str


DnsContent = Annotated[
    Union[ARecord, AAAARecord, CNAMERecord, NSRecord, MXRecord, TXTRecord],
    Field(discriminator="type"),
]

_dns_content_adapter: TypeAdapter[Any] = TypeAdapter(DnsContent)


class DnsRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    type: str
    content: str
    ttl: int
    proxied: Optional[bool] = None
    proxiable: Optional[bool] = None
    locked: Optional[bool] = None
    priority: Optional[int] = None
    zone_id: Optional[str] = None
    zone_name: Optional[str] = None
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None

    @property
    def dns_content(self) -> Union[ARecord, AAAARecord, CNAMERecord, NSRecord, MXRecord, TXTRecord]:
        """Typed view of ``type``/``content`` (and ``priority`` for MX)."""
        data: Dict[str, Any] = {"type": self.type, "content": self.content}
        if self.priority is not None:
            data["priority"] = self.priority
        return _dns_content_adapter.validate_python(data)


class DeleteDnsRecordResponse(BaseModel):
    id: str


# ── Params ───────────────────────────────────────────────────────


class ListDnsRecordsOrder(str, enum.Enum):
    TYPE = "type"
    NAME = "name"
    CONTENT = "content"
    TTL = "ttl"
    PROXIED = "proxied"


class ListDnsRecordsParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_type: Optional[str] = Field(default=None, alias="type")
    name: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    order: Optional[ListDnsRecordsOrder] = None
    direction: Optional[OrderDirection] = None
    search_match: Optional[SearchMatch] = Field(default=None, alias="match")


class DnsRecordParams(BaseModel):
    """Body of create and update; ``content`` is flattened into the JSON object."""

    name: str
    content: DnsContent
    ttl: Optional[int] = None
    proxied: Optional[bool] = None

    def to_json(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"content"}, exclude_none=True)
        data.update(self.content.model_dump(mode="json"))
        return data


# ── Endpoints ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListDnsRecords(Endpoint[List[DnsRecord]]):
    """GET zones/{zone_identifier}/dns_records"""

    method = Method.GET
    response_type = List[DnsRecord]

    zone_identifier: str
    params: ListDnsRecordsParams = field(default_factory=ListDnsRecordsParams)

    def path(self) -> str:
        return f"zones/{self.zone_identifier}/dns_records"

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)


@dataclass(frozen=True)
class CreateDnsRecord(Endpoint[DnsRecord]):
    """POST zones/{zone_identifier}/dns_records"""

    method = Method.POST
    response_type = DnsRecord

    zone_identifier: str
    params: DnsRecordParams

    def path(self) -> str:
        return f"zones/{self.zone_identifier}/dns_records"

    def body(self) -> Optional[RequestBody]:
        return JsonBody(self.params.to_json())


@dataclass(frozen=True)
class UpdateDnsRecord(Endpoint[DnsRecord]):
    """PUT zones/{zone_identifier}/dns_records/{identifier}"""

    method = Method.PUT
    response_type = DnsRecord

    zone_identifier: str
    identifier: str
    params: DnsRecordParams

    def path(self) -> str:
        return f"zones/{self.zone_identifier}/dns_records/{self.identifier}"

    def body(self) -> Optional[RequestBody]:
        return JsonBody(self.params.to_json())


@dataclass(frozen=True)
class DeleteDnsRecord(Endpoint[DeleteDnsRecordResponse]):
    """DELETE zones/{zone_identifier}/dns_records/{identifier}"""

    method = Method.DELETE
    response_type = DeleteDnsRecordResponse

    zone_identifier: str
    identifier: str

    def path(self) -> str:
        return f"zones/{self.zone_identifier}/dns_records/{self.identifier}"
