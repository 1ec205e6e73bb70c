"""Asynchronous client for the Cloudflare API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from cfapi.auth import Credentials
from cfapi.config import ClientConfig, Environment
from cfapi.endpoint import Endpoint
from cfapi.errors import Invalid, RequestError
from cfapi.response import ApiResponse, map_response
from cfapi.transport import HttpxContentDeserializer, build_request

logger = logging.getLogger("cfapi.async_client")


class AsyncClient:
    """Asynchronous client for the Cloudflare API.

    Usage::

        import asyncio
        from cfapi import AsyncClient, UserAuthToken
        from cfapi.endpoints.account import ListAccounts

        async def main():
            async with AsyncClient(UserAuthToken("...")) as c:
                resp = await c.request(ListAccounts())
                for account in resp.unwrap().result:
                    print(account.name)

        asyncio.run(main())

    Concurrent ``request()`` calls from independent tasks may share one
    instance; the only suspension point is sending the request.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        environment: Optional[Environment] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize async client.

        Args:
            credentials: One of UserAuthKey, UserAuthToken or ServiceKey
            config: Timeout, default headers and optional resolve IP
            environment: Production by default; custom for local servers
            transport: Replacement httpx transport, e.g. httpx.MockTransport
        """
        self._credentials = credentials
        self._config = config or ClientConfig()
        self._environment = environment or Environment.production()
        self._client = httpx.AsyncClient(
            headers=self._config.default_headers,
            timeout=self._config.http_timeout,
            transport=transport,
        )

    @property
    def environment(self) -> Environment:
        return self._environment

    async def request(self, endpoint: Endpoint[Any]) -> ApiResponse[Any]:
        """Send one endpoint request and map the response."""
        try:
            req = build_request(self._client, endpoint, self._credentials, self._environment, self._config)
        except RequestError as exc:
            logger.debug("%s: request not sent: %s", type(endpoint).__name__, exc)
            return ApiResponse.err(Invalid(exc))

        logger.debug("%s %s", req.method, req.url)
        try:
            resp = await self._client.send(req)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %r", req.method, req.url, exc)
            return ApiResponse.err(Invalid(exc))

        logger.debug("%s %s -> %d", req.method, req.url, resp.status_code)
        result = map_response(endpoint, HttpxContentDeserializer(resp))
        if not result.is_ok:
            logger.debug("%s %s: %r", req.method, req.url, result.failure)
        return result

    # ── Context Manager ─────────────────────────────────────────

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
