"""Blocking client for the Cloudflare API."""

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

logger = logging.getLogger("cfapi.client")


class Client:
    """Synchronous client for the Cloudflare API.

    Usage::

        from cfapi import Client, UserAuthToken
        from cfapi.endpoints.zone import ZoneDetails

        with Client(UserAuthToken("...")) as c:
            resp = c.request(ZoneDetails(identifier="023e105f4ecef8ad9ca31a8372d0c353"))
            print(resp.unwrap().result.name)

    ``request()`` never raises: every failure comes back inside the
    returned :class:`~cfapi.response.ApiResponse`. One instance can be
    shared by many threads.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        environment: Optional[Environment] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config or ClientConfig()
        self._environment = environment or Environment.production()
        self._client = httpx.Client(
            headers=self._config.default_headers,
            timeout=self._config.http_timeout,
            transport=transport,
        )

    @property
    def environment(self) -> Environment:
        return self._environment

    def request(self, endpoint: Endpoint[Any]) -> ApiResponse[Any]:
        """Send one endpoint request and map the response."""
        try:
            req = build_request(self._client, endpoint, self._credentials, self._environment, self._config)
        except RequestError as exc:
            logger.debug("%s: request not sent: %s", type(endpoint).__name__, exc)
            return ApiResponse.err(Invalid(exc))

        logger.debug("%s %s", req.method, req.url)
        try:
            resp = self._client.send(req)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %r", req.method, req.url, exc)
            return ApiResponse.err(Invalid(exc))

        logger.debug("%s %s -> %d", req.method, req.url, resp.status_code)
        result = map_response(endpoint, HttpxContentDeserializer(resp))
        if not result.is_ok:
            logger.debug("%s %s: %r", req.method, req.url, result.failure)
        return result

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
