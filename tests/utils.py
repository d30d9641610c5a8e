from collections.abc import Callable
from typing import Any

import httpx

from instagram_client import InstagramClient

CLIENT_ID = "client-id"
CLIENT_SECRET = "client-secret"
REDIRECT_URI = "https://example.com/callback"
TOKEN = "token-123"


def make_response(status: int, payload: Any = None, *, method: str = "GET") -> httpx.Response:
    request = httpx.Request(method, "https://api.instagram.com/v1/resource")
    if payload is None:
        return httpx.Response(status, request=request)
    return httpx.Response(status, json=payload, request=request)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was handed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.reply = handler or (lambda request: httpx.Response(200, json={"data": {}}))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]



def make_client(handler=None, **kwargs):
    """Build a client wired to a RecordingTransport; returns both."""
    transport = RecordingTransport(handler)
    options = {
        "client_id": CLIENT_ID,
        "client_secret": CLIENT_SECRET,
        "redirect_uri": REDIRECT_URI,
        "access_token": TOKEN,
    }
    options.update(kwargs)
    client = InstagramClient(client=httpx.Client(transport=transport), **options)
    return client, transport
