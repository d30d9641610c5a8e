import httpx
import pytest

from instagram_client import InstagramClient

from .utils import CLIENT_ID, CLIENT_SECRET, REDIRECT_URI, TOKEN, RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> InstagramClient:
    http = httpx.Client(transport=transport)
    client = InstagramClient(
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        redirect_uri=REDIRECT_URI,
        access_token=TOKEN,
        client=http,
    )
    try:
        yield client
    finally:
        client.close()
        http.close()
