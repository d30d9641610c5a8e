"""
OAuth endpoints. Neither call sends an access token.
"""

from collections.abc import Sequence
from typing import Any

from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError

DEFAULT_SCOPES = ("basic",)


class OAuthAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def login_url(self, scopes: Sequence[str] | None = None) -> str:
        """Return the authorization URL the user should be sent to."""
        scopes = DEFAULT_SCOPES if scopes is None else scopes
        if isinstance(scopes, str):
            scopes = [scopes]
        config = self._requester.config
        params = {
            "client_id": config.client_id,
            "redirect_uri": config.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
        }
        return self._requester.build("oauth/authorize", params, raw=True, verb="GET").url

    def exchange_code(self, code: str) -> Any:
        """Exchange an authorization code for an access token response.

        The token endpoint URL is built raw and dispatched as an absolute URL,
        so it never receives an ``access_token`` query parameter.
        """
        if not code:
            raise InvalidArgumentError("code is required")
        config = self._requester.config
        url = self._requester.build("oauth/access_token", raw=True, verb="POST").url
        params = {
            "client_secret": config.client_secret,
            "client_id": config.client_id,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.redirect_uri,
        }
        return self._requester.execute(url, "POST", params)
