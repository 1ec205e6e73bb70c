"""Zones: the domains managed in an account."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cfapi.content import JsonBody, RequestBody
from cfapi.endpoint import Endpoint, Method, OrderDirection, SearchMatch, serialize_query


class Status(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INITIALIZING = "initializing"
    MOVED = "moved"
    DELETED = "deleted"
    DEACTIVATED = "deactivated"


class ZoneType(str, enum.Enum):
    FULL = "full"
    PARTIAL = "partial"


class ListZonesOrder(str, enum.Enum):
    NAME = "name"
    STATUS = "status"
    EMAIL = "email"


# ── Models ───────────────────────────────────────────────────────


class AccountRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None


class Zone(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    status: Optional[Status] = None
    paused: Optional[bool] = None
    zone_type: Optional[ZoneType] = Field(default=None, alias="type")
    account: Optional[AccountRef] = None
    name_servers: List[str] = Field(default_factory=list)
    original_name_servers: Optional[List[str]] = None
    development_mode: Optional[int] = None
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None
    activated_on: Optional[datetime] = None
    permissions: List[str] = Field(default_factory=list)


# ── Params ───────────────────────────────────────────────────────


class ListZonesParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    status: Optional[Status] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    order: Optional[ListZonesOrder] = None
    direction: Optional[OrderDirection] = None
    search_match: Optional[SearchMatch] = Field(default=None, alias="match")


class CreateZoneParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    account: AccountRef
    jump_start: Optional[bool] = None
    zone_type: Optional[ZoneType] = Field(default=None, alias="type")


# ── Endpoints ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListZones(Endpoint[List[Zone]]):
    """GET zones"""

    method = Method.GET
    response_type = List[Zone]

    params: ListZonesParams = field(default_factory=ListZonesParams)

    def path(self) -> str:
        return "zones"

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)


@dataclass(frozen=True)
class ZoneDetails(Endpoint[Zone]):
    """GET zones/{identifier}"""

    method = Method.GET
    response_type = Zone

    identifier: str

    def path(self) -> str:
        return f"zones/{self.identifier}"


@dataclass(frozen=True)
class CreateZone(Endpoint[Zone]):
    """POST zones"""

    method = Method.POST
    response_type = Zone

    params: CreateZoneParams

    def path(self) -> str:
        return "zones"

    def body(self) -> Optional[RequestBody]:
        return JsonBody(self.params)
