"""Stand-in clients for code that needs a client but must not reach the API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cfapi.endpoint import Endpoint, Method
from cfapi.errors import HttpError
from cfapi.response import ApiError, ApiErrors, ApiResponse

MOCK_ERROR_CODE = 9999


@dataclass(frozen=True)
class NoopEndpoint(Endpoint[Any]):
    """Does nothing. Meant for use with the mock clients."""

    method = Method.GET

    def path(self) -> str:
        return "no/such/path/"


def mock_failure() -> HttpError:
    return HttpError(
        500,
        ApiErrors(errors=[ApiError(code=MOCK_ERROR_CODE, message="This is a mocked failure response")]),
    )


class MockApiClient:
    """Answers every request with the same 500 failure."""

    def request(self, endpoint: Endpoint[Any]) -> ApiResponse[Any]:
        return ApiResponse.err(mock_failure())

    def close(self) -> None:
        pass


class AsyncMockApiClient:
    async def request(self, endpoint: Endpoint[Any]) -> ApiResponse[Any]:
        return ApiResponse.err(mock_failure())

    async def aclose(self) -> None:
        pass
