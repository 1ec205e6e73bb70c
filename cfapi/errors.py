"""Failure types for the Cloudflare API client.

Clients never raise these out of ``request()``; they come back inside an
:class:`~cfapi.response.ApiResponse`. ``ApiResponse.unwrap()`` raises them
for callers who prefer exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from cfapi.response import ApiErrors


class ApiFailure(Exception):
    """Base class for every failure a request can end in."""

    status_code: Optional[int] = None


class HttpError(ApiFailure):
    """The API answered with a non-2xx status.

    ``errors`` is the parsed error envelope, or an empty one when the body
    could not be parsed.
    """

    def __init__(self, status_code: int, errors: "ApiErrors") -> None:
        self.status_code = status_code
        self.errors = errors
        super().__init__(self._describe())

    def _describe(self) -> str:
        lines = [f"HTTP {self.status_code}"]
        for err in self.errors.errors:
            line = f"{err.code}: {err.message}"
            if err.other:
                line += f" ({err.other})"
            lines.append(line)
        for key, value in self.errors.other.items():
            lines.append(f"{key}: {value}")
        return "\n".join(lines)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, HttpError):
            return NotImplemented
        return self.status_code == other.status_code and self.errors == other.errors

    def __hash__(self) -> int:
        return hash((HttpError, self.status_code))

    def __repr__(self) -> str:
        return f"HttpError({self.status_code}, {self.errors!r})"


class Invalid(ApiFailure):
    """The call could not be completed or its answer made no sense.

    Wraps a transport error (connection, TLS, timeout), a request that
    could not be built, or a 2xx body that does not match the shape the
    endpoint declared.
    """

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(str(error))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Invalid):
            return NotImplemented
        return str(self.error) == str(other.error)

    def __hash__(self) -> int:
        return hash((Invalid, str(self.error)))

    def __repr__(self) -> str:
        return f"Invalid({type(self.error).__name__}: {self.error})"


class RequestError(Exception):
    """A request body, query or URL could not be built. Raised before any I/O."""


class UnknownContentError(Exception):
    """The response content type does not match what the endpoint declared."""

    def __init__(self, status_code: int, content_type: Optional[str]) -> None:
        self.status_code = status_code
        self.content_type = content_type
        super().__init__(
            f"unexpected content type {content_type!r} for response with status {status_code}"
        )
