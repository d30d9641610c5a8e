"""
Custom exceptions raised by the instagram_client package.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

_ACCESS_TOKEN_VALUE = re.compile(r"(access_token=)[^&#'\"\s]*")


class ErrorKind(str, Enum):
    GENERIC = "generic"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    NOT_PERMITTED = "not_permitted"


class InstagramError(Exception):
    """Base exception for all errors raised by ``instagram_client``."""


class InvalidArgumentError(InstagramError, ValueError):
    """Raised when a call is malformed before anything is sent."""


class ConfigurationError(InstagramError, ValueError):
    """Raised when the client configuration is missing or invalid."""


class APIError(InstagramError):
    """
    Raised as the outcome of a failed call.

    Attributes:
        message: Human readable message.
        code: Numeric code from the error payload, the HTTP status, or ``None``.
        status_code: HTTP status code, when a response was received.
        error_type: ``error_type`` field of the payload, when present.
        payload: The full parsed JSON error payload, when present.
    """

    kind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        status_code: int | None = None,
        error_type: str | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.error_type = error_type
        self.payload = payload
        super().__init__(message)


class GenericError(APIError):
    """Raised for failures that have no more specific kind."""


class TransportError(GenericError):
    """Raised when the underlying HTTP transport failed before receiving a response."""


class NotFoundError(APIError):
    kind = ErrorKind.NOT_FOUND


class AuthenticationError(APIError):
    """Raised when the access token is missing locally or rejected upstream."""

    kind = ErrorKind.AUTHENTICATION


class NotPermittedError(APIError):
    """Raised when the token lacks the scope the endpoint requires."""

    kind = ErrorKind.NOT_PERMITTED


ERROR_TYPE_MAP: dict[str, type[APIError]] = {
    "OAuthParameterException": AuthenticationError,
    "OAuthPermissionsException": NotPermittedError,
}


class EnvelopeShape(str, Enum):
    NESTED = "meta"
    FLAT = "flat"


@dataclass(frozen=True, slots=True)
class ErrorEnvelope:
    """
    Error body returned by the API.

    The API answers with either ``{"meta": {...}}`` or the same fields at the
    top level. ``parse`` picks the nested shape whenever a ``meta`` key exists.
    """

    shape: EnvelopeShape
    error_type: str
    message: str
    code: int

    @classmethod
    def parse(cls, payload: Mapping[str, Any], *, status_code: int) -> "ErrorEnvelope":
        if "meta" in payload:
            meta = payload["meta"]
            if not isinstance(meta, Mapping):
                meta = {}
            return cls(
                shape=EnvelopeShape.NESTED,
                error_type=str(meta.get("error_type") or "Unknown"),
                message=str(meta.get("error_message") or "Message not available"),
                code=_coerce_code(meta.get("code"), status_code),
            )
        return cls(
            shape=EnvelopeShape.FLAT,
            error_type=str(payload.get("error_type") or "Unknown"),
            message=str(payload.get("error_message") or "Message is not available"),
            code=_coerce_code(payload.get("code"), status_code),
        )

    @property
    def formatted_message(self) -> str:
        return f"[{self.error_type}]: {self.message}"

    def to_error(self, *, status_code: int, payload: Mapping[str, Any]) -> APIError:
        error_cls = ERROR_TYPE_MAP.get(self.error_type, GenericError)
        return error_cls(
            self.formatted_message,
            code=self.code,
            status_code=status_code,
            error_type=self.error_type,
            payload=payload,
        )


def _coerce_code(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return fallback


def mask_access_token(text: str) -> str:
    """Replace every ``access_token`` query value in ``text`` with ``***``."""
    return _ACCESS_TOKEN_VALUE.sub(r"\1***", text)


def classify_http_error(exc: httpx.HTTPStatusError) -> APIError:
    """Map an HTTP error response onto the matching ``APIError`` subclass."""
    response = exc.response
    status = response.status_code

    if status == 404:
        return NotFoundError(mask_access_token(str(exc)), code=404, status_code=404)

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if not isinstance(payload, Mapping):
        return GenericError(mask_access_token(str(exc)), code=status, status_code=status)

    envelope = ErrorEnvelope.parse(payload, status_code=status)
    return envelope.to_error(status_code=status, payload=payload)
