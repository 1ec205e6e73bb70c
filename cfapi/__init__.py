"""Typed Python client for the Cloudflare v4 API."""

from cfapi.async_client import AsyncClient
from cfapi.auth import Credentials, ServiceKey, UserAuthKey, UserAuthToken, credentials_from_env
from cfapi.client import Client
from cfapi.config import ClientConfig, Environment, environment_from_env
from cfapi.content import (
    ContentType,
    EmptyBody,
    JsonBody,
    MultipartBody,
    MultipartPart,
    RawBody,
)
from cfapi.endpoint import Endpoint, Method, OrderDirection, SearchMatch
from cfapi.errors import ApiFailure, HttpError, Invalid, RequestError, UnknownContentError
from cfapi.response import ApiError, ApiErrors, ApiResponse, ApiSuccess

__version__ = "0.1.0"

__all__ = [
    "Client",
    "AsyncClient",
    "Credentials",
    "UserAuthKey",
    "UserAuthToken",
    "ServiceKey",
    "credentials_from_env",
    "ClientConfig",
    "Environment",
    "environment_from_env",
    "ContentType",
    "EmptyBody",
    "JsonBody",
    "RawBody",
    "MultipartBody",
    "MultipartPart",
    "Endpoint",
    "Method",
    "OrderDirection",
    "SearchMatch",
    "ApiFailure",
    "HttpError",
    "Invalid",
    "RequestError",
    "UnknownContentError",
    "ApiError",
    "ApiErrors",
    "ApiResponse",
    "ApiSuccess",
]
