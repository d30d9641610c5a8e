"""
Python client for the Instagram REST API.
"""

from ._constants import VERSION as __version__
from .async_client import AsyncInstagramClient
from .client import InstagramClient
from .config import ClientConfig, load_config
from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    GenericError,
    InstagramError,
    InvalidArgumentError,
    NotFoundError,
    NotPermittedError,
    TransportError,
)
from .request_builder import BuiltRequest, RequestBuilder, Verb
from .response import StructuredResponse

__all__ = [
    "InstagramClient",
    "AsyncInstagramClient",
    "ClientConfig",
    "load_config",
    "RequestBuilder",
    "BuiltRequest",
    "Verb",
    "StructuredResponse",
    "InstagramError",
    "InvalidArgumentError",
    "ConfigurationError",
    "APIError",
    "GenericError",
    "TransportError",
    "NotFoundError",
    "AuthenticationError",
    "NotPermittedError",
    "ErrorKind",
    "__version__",
]
