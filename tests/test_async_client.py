"""Tests for AsyncClient.

Same request/response paths as the blocking client, driven through
httpx.MockTransport from inside an event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List

import httpx
from pydantic import BaseModel

from cfapi import (
    ApiErrors,
    AsyncClient,
    ClientConfig,
    Endpoint,
    HttpError,
    Invalid,
    Method,
    UserAuthKey,
    UserAuthToken,
)
from cfapi.endpoints.workerskv import ReadKey, WriteKey


def run_async(coro):
    """Helper to run async coroutine in sync test."""
    return asyncio.run(coro)


class Thing(BaseModel):
    id: str


@dataclass(frozen=True)
class GetThing(Endpoint[Thing]):
    method = Method.GET
    response_type = Thing

    identifier: str = "abc"

    def path(self) -> str:
        return f"things/{self.identifier}"


def success(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"result": result, "success": True, "errors": [], "messages": []})


class TestAsyncClientBasics:
    """Construction and lifecycle."""

    def test_context_manager(self) -> None:
        """Async client works as context manager."""
        async def go():
            async with AsyncClient(UserAuthToken("t")) as client:
                assert isinstance(client, AsyncClient)
        run_async(go())

    def test_aclose(self) -> None:
        client = AsyncClient(UserAuthToken("t"))
        run_async(client.aclose())


class TestAsyncRequests:
    """End-to-end requests."""

    def test_get(self) -> None:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return success({"id": "abc"})

        async def go():
            async with AsyncClient(UserAuthToken("T"), transport=httpx.MockTransport(handler)) as client:
                return await client.request(GetThing("abc"))

        resp = run_async(go())
        assert resp.value.result.id == "abc"
        assert seen[0].headers["authorization"] == "Bearer T"
        assert str(seen[0].url) == "https://api.cloudflare.com/client/v4/things/abc"

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"errors": [{"code": 10009, "message": "key not found"}]})

        async def go():
            async with AsyncClient(UserAuthToken("t"), transport=httpx.MockTransport(handler)) as client:
                return await client.request(ReadKey("acct", "ns", "missing"))

        resp = run_async(go())
        assert isinstance(resp.failure, HttpError)
        assert resp.failure.status_code == 404
        assert resp.failure.errors.errors[0].code == 10009

    def test_raw_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"hello", headers={"content-type": "application/octet-stream"})

        async def go():
            async with AsyncClient(UserAuthToken("t"), transport=httpx.MockTransport(handler)) as client:
                return await client.request(ReadKey("acct", "ns", "greeting"))

        assert run_async(go()).value == b"hello"

    def test_multipart_upload(self) -> None:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return success(None)

        async def go():
            async with AsyncClient(
                UserAuthKey("ops@example.com", "k"), transport=httpx.MockTransport(handler)
            ) as client:
                return await client.request(WriteKey("acct", "ns", "k", value=b"\x00\x01", metadata={"a": 1}))

        resp = run_async(go())
        assert resp.is_ok
        assert seen[0].headers["x-auth-email"] == "ops@example.com"
        assert seen[0].headers["content-type"].startswith("multipart/form-data; boundary=")
        assert b'name="metadata"' in seen[0].content
        assert b"\x00\x01" in seen[0].content

    def test_unparsable_error_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        async def go():
            async with AsyncClient(UserAuthToken("t"), transport=httpx.MockTransport(handler)) as client:
                return await client.request(GetThing())

        assert run_async(go()).failure == HttpError(503, ApiErrors())

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async def go():
            async with AsyncClient(
                UserAuthToken("t"),
                config=ClientConfig(http_timeout=1.0),
                transport=httpx.MockTransport(handler),
            ) as client:
                return await client.request(GetThing())

        resp = run_async(go())
        assert isinstance(resp.failure, Invalid)

    def test_concurrent_requests(self) -> None:
        """Independent tasks can share one client."""
        def handler(request: httpx.Request) -> httpx.Response:
            return success({"id": request.url.path.rsplit("/", 1)[1]})

        async def go():
            async with AsyncClient(UserAuthToken("t"), transport=httpx.MockTransport(handler)) as client:
                return await asyncio.gather(*(client.request(GetThing(str(i))) for i in range(5)))

        results = run_async(go())
        assert [r.value.result.id for r in results] == ["0", "1", "2", "3", "4"]
        assert all(r.is_ok for r in results)
