"""Accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from cfapi.endpoint import Endpoint, Method, OrderDirection, serialize_query


class AccountSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    enforce_twofactor: bool = False


class Account(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    settings: Optional[AccountSettings] = None
    created_on: Optional[datetime] = None


class ListAccountsParams(BaseModel):
    page: Optional[int] = None
    per_page: Optional[int] = None
    direction: Optional[OrderDirection] = None


@dataclass(frozen=True)
class ListAccounts(Endpoint[List[Account]]):
    """GET accounts: the accounts the credentials can access."""

    method = Method.GET
    response_type = List[Account]

    params: Optional[ListAccountsParams] = None

    def path(self) -> str:
        return "accounts"

    def query(self) -> Optional[Dict[str, Any]]:
        return serialize_query(self.params)


@dataclass(frozen=True)
class AccountDetails(Endpoint[Account]):
    """GET accounts/{account_identifier}"""

    method = Method.GET
    response_type = Account

    account_identifier: str

    def path(self) -> str:
        return f"accounts/{self.account_identifier}"
