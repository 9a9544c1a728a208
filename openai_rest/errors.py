from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Type

import httpx


class OpenAIRestError(Exception):
    """Base class for every error raised by the client."""
    kind: str = "internal"


class ConfigurationError(OpenAIRestError):
    kind = "configuration"


class TransportError(OpenAIRestError):
    """Connection, TLS or protocol failure before a response was received."""
    kind = "transport"


class RequestTimeout(TransportError):
    kind = "timeout"


class SerializationError(OpenAIRestError):
    kind = "serialization"


class DeserializationError(OpenAIRestError):
    """Response body was not JSON or did not match the expected schema."""
    kind = "deserialization"

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApiError(OpenAIRestError):
    kind = "api"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
        param: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.code = code
        self.param = param
        self.headers: Dict[str, str] = dict(headers or {})
        self.body = body

    def __str__(self) -> str:
        parts = [f"status={self.status_code}"]
        if self.error_type:
            parts.append(f"type={self.error_type}")
        if self.code:
            parts.append(f"code={self.code}")
        return f"{self.message} ({' '.join(parts)})"

    @property
    def request_id(self) -> Optional[str]:
        return self.headers.get("x-request-id")

    @classmethod
    def from_payload(
        cls,
        status_code: int,
        payload: Any,
        *,
        headers: Optional[Mapping[str, str]] = None,
        reason: str = "",
    ) -> "ApiError":
        """Build the status-specific error from a decoded (or raw text) error body."""
        message, error_type, code, param = _parse_envelope(payload)
        if not message:
            message = reason or f"HTTP {status_code}"
        err_cls = error_class_for_status(status_code)
        return err_cls(
            message,
            status_code=status_code,
            error_type=error_type,
            code=code,
            param=param,
            headers=headers,
            body=payload,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        text = response.text
        try:
            payload: Any = json.loads(text) if text else None
        except ValueError:
            payload = text
        return cls.from_payload(
            response.status_code,
            payload,
            headers=response.headers,
            reason=response.reason_phrase,
        )


class BadRequestError(ApiError):
    pass


class AuthenticationError(ApiError):
    pass


class PermissionDeniedError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ConflictError(ApiError):
    pass


class UnprocessableEntityError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class InternalServerError(ApiError):
    pass


_STATUS_ERRORS: Dict[int, Type[ApiError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}


def error_class_for_status(status_code: int) -> Type[ApiError]:
    if status_code >= 500:
        return InternalServerError
    return _STATUS_ERRORS.get(status_code, ApiError)


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _parse_envelope(payload: Any):
    # Accepted shapes: {"error": {...}}, {"error": "text"}, {"message": ...}, plain text.
    if isinstance(payload, dict):
        err = payload.get("error", payload)
        if isinstance(err, dict):
            return (
                _as_str(err.get("message")),
                _as_str(err.get("type")),
                _as_str(err.get("code")),
                _as_str(err.get("param")),
            )
        if isinstance(err, str):
            return err, None, None, None
        return None, None, None, None
    if isinstance(payload, str):
        text = payload.strip()
        return (text[:500] or None), None, None, None
    return None, None, None, None
