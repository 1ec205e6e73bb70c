"""Tests for the content model: content types, JSON encoding and request bodies."""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

import pytest
from pydantic import BaseModel, ConfigDict, Field

from cfapi.content import (
    ContentSerializer,
    ContentType,
    EmptyBody,
    JsonBody,
    MultipartBody,
    MultipartPart,
    MultipartSerializer,
    RawBody,
    encode_json,
)
from cfapi.errors import RequestError


class RecordingMultipart(MultipartSerializer[list]):
    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.parts: List[Tuple[str, bytes, ContentType, Optional[str]]] = []

    def add_content(self, data, content_type, name, file_name=None):
        self.parts.append((name, data, content_type, file_name))
        return self

    def end(self) -> list:
        self.calls.append(("multipart", self.parts))
        return self.calls


class RecordingSerializer(ContentSerializer[list]):
    """Records which single method a body called."""

    def __init__(self) -> None:
        self.calls: list = []

    def empty(self) -> list:
        self.calls.append(("empty",))
        return self.calls

    def json(self, value: Any) -> list:
        self.calls.append(("json", value))
        return self.calls

    def raw(self, data: bytes) -> list:
        self.calls.append(("raw", data))
        return self.calls

    def multipart(self) -> RecordingMultipart:
        return RecordingMultipart(self.calls)


class TestContentTypeParse:
    """Mapping Content-Type header values to known types."""

    def test_exact(self) -> None:
        assert ContentType.parse("application/json") is ContentType.JSON
        assert ContentType.parse("application/octet-stream") is ContentType.OCTET_STREAM

    def test_parameters_ignored(self) -> None:
        assert ContentType.parse("application/json; charset=utf-8") is ContentType.JSON
        assert ContentType.parse("text/plain;charset=UTF-8") is ContentType.PLAIN_TEXT

    def test_case_insensitive(self) -> None:
        assert ContentType.parse("Application/JSON") is ContentType.JSON

    def test_unknown_and_missing(self) -> None:
        assert ContentType.parse("text/html") is None
        assert ContentType.parse("") is None
        assert ContentType.parse(None) is None

    def test_mime(self) -> None:
        assert ContentType.JAVASCRIPT_MODULE.mime == "application/javascript+module"
        assert ContentType.FORM_DATA.mime == "multipart/form-data"


class TestEncodeJson:
    """JSON encoding of plain values and pydantic models."""

    def test_plain_values(self) -> None:
        assert json.loads(encode_json({"title": "ns", "n": [1, 2]})) == {"title": "ns", "n": [1, 2]}

    def test_model_uses_aliases_and_drops_none(self) -> None:
        class Params(BaseModel):
            model_config = ConfigDict(populate_by_name=True)

            zone_type: Optional[str] = Field(default=None, alias="type")
            name: str
            jump_start: Optional[bool] = None

        assert json.loads(encode_json(Params(name="example.com", zone_type="full"))) == {
            "type": "full",
            "name": "example.com",
        }

    def test_unserializable_raises_request_error(self) -> None:
        with pytest.raises(RequestError):
            encode_json({"x": object()})


class TestRequestBodies:
    """Each body calls exactly one serializer method."""

    def test_empty(self) -> None:
        assert EmptyBody().serialize(RecordingSerializer()) == [("empty",)]

    def test_json(self) -> None:
        assert JsonBody({"a": 1}).serialize(RecordingSerializer()) == [("json", {"a": 1})]

    def test_raw(self) -> None:
        assert RawBody(b"\x00\x01").serialize(RecordingSerializer()) == [("raw", b"\x00\x01")]

    def test_multipart_keeps_order_and_types(self) -> None:
        body = MultipartBody(
            [
                MultipartPart.json("metadata", {"main_module": "worker.js"}),
                MultipartPart.javascript_module("worker.js", "export default {}", file_name="worker.js"),
                MultipartPart.wasm("mod.wasm", b"\x00asm", file_name="mod.wasm"),
                MultipartPart.text("note", "hi"),
            ]
        )
        calls = body.serialize(RecordingSerializer())
        assert len(calls) == 1
        kind, parts = calls[0]
        assert kind == "multipart"
        assert [p[0] for p in parts] == ["metadata", "worker.js", "mod.wasm", "note"]
        assert json.loads(parts[0][1]) == {"main_module": "worker.js"}
        assert parts[0][2] is ContentType.JSON
        assert parts[1] == (
            "worker.js",
            b"export default {}",
            ContentType.JAVASCRIPT_MODULE,
            "worker.js",
        )
        assert parts[2] == ("mod.wasm", b"\x00asm", ContentType.WASM, "mod.wasm")
        assert parts[3] == ("note", b"hi", ContentType.PLAIN_TEXT, None)

    def test_multipart_empty(self) -> None:
        assert MultipartBody().serialize(RecordingSerializer()) == [("multipart", [])]

    def test_multipart_accepts_generator(self) -> None:
        body = MultipartBody(MultipartPart.octet_stream(f"p{i}", b"x") for i in range(2))
        assert len(body.parts) == 2

    def test_part_text_flag(self) -> None:
        assert MultipartPart.javascript("a", "x").is_text
        assert not MultipartPart.octet_stream("a", b"x").is_text


class TestContentTypeChecks:
    """Values of the wrong type fail as RequestError while serializing."""

    def test_binary_part_rejects_str(self) -> None:
        body = MultipartBody([MultipartPart.octet_stream("value", "not bytes")])
        with pytest.raises(RequestError, match="bytes"):
            body.serialize(RecordingSerializer())

    def test_text_part_rejects_bytes(self) -> None:
        body = MultipartBody([MultipartPart.javascript_module("worker.js", b"export default {}")])
        with pytest.raises(RequestError, match="str"):
            body.serialize(RecordingSerializer())

    def test_raw_body_rejects_str(self) -> None:
        with pytest.raises(RequestError):
            RawBody("text").serialize(RecordingSerializer())

    def test_raw_body_accepts_bytearray(self) -> None:
        assert RawBody(bytearray(b"ab")).serialize(RecordingSerializer()) == [("raw", b"ab")]
