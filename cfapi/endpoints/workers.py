"""Worker scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cfapi.content import MultipartBody, MultipartPart, RequestBody
from cfapi.endpoint import Endpoint, Method


class WorkersScript(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    etag: Optional[str] = None
    created_on: Optional[datetime] = None
    modified_on: Optional[datetime] = None
    usage_model: Optional[str] = None


class WorkerMetadata(BaseModel):
    """The ``metadata`` part of a module worker upload."""

    model_config = ConfigDict(extra="allow")

    main_module: str
    compatibility_date: Optional[str] = None
    compatibility_flags: Optional[List[str]] = None
    bindings: List[Dict[str, Any]] = Field(default_factory=list)


@dataclass(frozen=True)
class ListScripts(Endpoint[List[WorkersScript]]):
    method = Method.GET
    response_type = List[WorkersScript]

    account_identifier: str

    def path(self) -> str:
        return f"accounts/{self.account_identifier}/workers/scripts"


@dataclass(frozen=True)
class UploadScript(Endpoint[WorkersScript]):
    """Create or replace a module worker.

    Sent as multipart/form-data: a JSON ``metadata`` part followed by the
    main module, then any extra modules, in that order.
    """

    method = Method.PUT
    response_type = WorkersScript

    account_identifier: str
    script_name: str
    metadata: WorkerMetadata
    script: str
    extra_modules: Dict[str, bytes] = field(default_factory=dict)

    def path(self) -> str:
        return f"accounts/{self.account_identifier}/workers/scripts/{self.script_name}"

    def body(self) -> Optional[RequestBody]:
        main = self.metadata.main_module
        parts = [
            MultipartPart.json("metadata", self.metadata),
            MultipartPart.javascript_module(main, self.script, file_name=main),
        ]
        for name, data in self.extra_modules.items():
            if name.endswith(".wasm"):
                parts.append(MultipartPart.wasm(name, data, file_name=name))
            else:
                parts.append(MultipartPart.octet_stream(name, data, file_name=name))
        return MultipartBody(parts)


@dataclass(frozen=True)
class DeleteScript(Endpoint[Any]):
    method = Method.DELETE

    account_identifier: str
    script_name: str

    def path(self) -> str:
        return f"accounts/{self.account_identifier}/workers/scripts/{self.script_name}"
