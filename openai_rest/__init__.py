from __future__ import annotations
from .config import VERSION as __version__, ClientConfig, ClientSettings, DEFAULT_BASE_URL
from .errors import (
    OpenAIRestError,
    ConfigurationError,
    TransportError,
    RequestTimeout,
    SerializationError,
    DeserializationError,
    ApiError,
    BadRequestError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    RateLimitError,
    InternalServerError,
)
from .client import Client, AsyncClient
from .streaming import Stream, AsyncStream
from .contracts import *

__all__ = [
    "__version__",
    "Client",
    "AsyncClient",
    "ClientConfig",
    "ClientSettings",
    "DEFAULT_BASE_URL",
    "Stream",
    "AsyncStream",
    "OpenAIRestError",
    "ConfigurationError",
    "TransportError",
    "RequestTimeout",
    "SerializationError",
    "DeserializationError",
    "ApiError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "RateLimitError",
    "InternalServerError",
]
