"""
Fixed values shared across the client.
"""

from importlib import metadata as _metadata

try:
    VERSION = _metadata.version("instagram-client")
except _metadata.PackageNotFoundError:  # pragma: no cover - local/checkout usage
    VERSION = "0.0.0"

API_HOST = "api.instagram.com"
API_VERSION = 1
DEFAULT_PROTOCOL = "https"
DEFAULT_LIMIT = 20
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = f"instagram-client/{VERSION};python"

LOGGER_NAME = "instagram_client"
ENV_PREFIX = "INSTAGRAM_"
