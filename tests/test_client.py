import logging
from unittest.mock import patch
from urllib.parse import parse_qs

import httpx
import pytest

from instagram_client import (
    AuthenticationError,
    ClientConfig,
    ConfigurationError,
    GenericError,
    InstagramClient,
    InvalidArgumentError,
    NotFoundError,
    StructuredResponse,
    TransportError,
    __version__,
)
from instagram_client.types import AccessToken, User

from .utils import CLIENT_ID, CLIENT_SECRET, REDIRECT_URI, TOKEN, make_client


def form(request: httpx.Request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode())


# ----------------------------------------------------------------------
# Construction and configuration
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "kwargs",
    [
        {"client_secret": CLIENT_SECRET},
        {"client_id": CLIENT_ID},
        {"client_id": "", "client_secret": CLIENT_SECRET},
        {"client_id": CLIENT_ID, "client_secret": ""},
        {"client_id": 123, "client_secret": CLIENT_SECRET},
        {"client_id": CLIENT_ID, "client_secret": CLIENT_SECRET, "protocol": "ftp"},
        {"client_id": CLIENT_ID, "client_secret": CLIENT_SECRET, "unknown_option": 1},
    ],
)
def test_construction_fails_fast_on_bad_credentials(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        InstagramClient(**kwargs)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        InstagramClient(client_secret=CLIENT_SECRET)


def test_from_config_rejects_mixed_arguments() -> None:
    config = ClientConfig(client_id=CLIENT_ID, client_secret=CLIENT_SECRET)
    with pytest.raises(ConfigurationError):
        InstagramClient(config=config, client_id="other")


def test_from_config_rejects_protocol_override() -> None:
    config = ClientConfig(client_id=CLIENT_ID, client_secret=CLIENT_SECRET)
    with pytest.raises(ConfigurationError):
        InstagramClient(config=config, protocol="http")


def test_from_config_uses_config() -> None:
    config = ClientConfig(client_id=CLIENT_ID, client_secret=CLIENT_SECRET, default_limit=5)
    with InstagramClient.from_config(config) as client:
        assert client.config is config
        assert client.get_limit_size() == 5


def test_from_env_reads_prefixed_variables() -> None:
    env = {"INSTAGRAM_CLIENT_ID": "env-id", "INSTAGRAM_CLIENT_SECRET": "env-secret"}
    with InstagramClient.from_env(env=env) as client:
        assert client.config.client_id == "env-id"
        assert client.config.protocol == "https"


def test_limit_size_resolution() -> None:
    client, _ = make_client()
    assert client.get_limit_size(None) == 20
    assert client.get_limit_size() == 20
    assert client.get_limit_size(0) == 0
    assert client.get_limit_size(5) == 5


def test_limit_size_uses_configured_default() -> None:
    client, _ = make_client(default_limit=50)
    assert client.get_limit_size(None) == 50


# ----------------------------------------------------------------------
# Access token
# ----------------------------------------------------------------------
def test_access_token_is_initially_absent() -> None:
    client, transport = make_client(access_token=None)
    assert client.has_access_token is False
    with pytest.raises(AuthenticationError):
        client.get_access_token()
    with pytest.raises(AuthenticationError):
        client.get_user()
    assert transport.requests == []


def test_access_token_setters() -> None:
    client, _ = make_client(access_token=None)
    client.set_access_token("abc")
    assert client.get_access_token() == "abc"
    client.access_token = "def"
    assert client.access_token == "def"
    client.set_access_token(None)
    assert client.has_access_token is False


@pytest.mark.parametrize("token", ["", 42])
def test_invalid_access_token_is_rejected(token) -> None:
    client, _ = make_client(access_token=None)
    with pytest.raises(InvalidArgumentError):
        client.set_access_token(token)


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------
def test_get_returns_structured_response(client: InstagramClient, transport) -> None:
    transport.reply = lambda request: httpx.Response(
        200, json={"data": {"id": "1", "username": "jack"}, "meta": {"code": 200}}
    )

    response = client.get_user()

    assert isinstance(response, StructuredResponse)
    assert response.get("data.username") == "jack"
    assert response.get("data.missing", "fallback") == "fallback"
    assert response.as_model(User).username == "jack"
    assert str(transport.last.url) == f"https://api.instagram.com/v1/users/self?access_token={TOKEN}"
    assert transport.last.method == "GET"


def test_default_headers_are_sent(client: InstagramClient, transport) -> None:
    client.get_user("42")
    headers = transport.last.headers
    assert headers["User-Agent"] == f"instagram-client/{__version__};python"
    assert headers["Accept"] == "application/json"


def test_user_agent_override() -> None:
    client, transport = make_client(user_agent="my-app/1.0")
    client.get_user()
    assert transport.last.headers["User-Agent"] == "my-app/1.0"


def test_post_sends_leftovers_as_form_body(client: InstagramClient, transport) -> None:
    client.add_media_comment("m1", "nice shot")

    request = transport.last
    assert request.method == "POST"
    assert str(request.url) == f"https://api.instagram.com/v1/media/m1/comments?access_token={TOKEN}"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert form(request) == {"text": ["nice shot"]}


@pytest.mark.parametrize("method", ["put", "patch"])
def test_put_and_patch_send_form_bodies(client: InstagramClient, transport, method) -> None:
    getattr(client, method)("users/:id/things", {"id": "9", "name": "x", "gone": None})
    request = transport.last
    assert request.method == method.upper()
    assert "name=" not in request.url.query.decode()
    assert form(request) == {"name": ["x"]}


def test_delete_keeps_params_in_query(client: InstagramClient, transport) -> None:
    client.delete_media_comment("m1", "c2")
    request = transport.last
    assert request.method == "DELETE"
    assert request.url.path == "/v1/media/m1/comments/c2"
    assert request.content == b""


def test_absolute_url_is_dispatched_verbatim() -> None:
    client, transport = make_client(access_token=None)
    client.get("https://api.instagram.com/oauth/authorize", {"client_id": "x", "skip": None})
    assert str(transport.last.url) == "https://api.instagram.com/oauth/authorize?client_id=x"


def test_404_raises_not_found(client: InstagramClient, transport) -> None:
    transport.reply = lambda request: httpx.Response(404, json={"meta": {"code": 404}})
    with pytest.raises(NotFoundError) as ctx:
        client.get_media("missing")
    assert ctx.value.code == 404


@pytest.mark.parametrize(
    ("status", "error_cls"), [(404, NotFoundError), (502, GenericError), (503, GenericError)]
)
def test_error_messages_never_carry_the_token(client: InstagramClient, transport, status, error_cls) -> None:
    transport.reply = lambda request: httpx.Response(status, text="")
    with pytest.raises(error_cls) as ctx:
        client.get_media("m1")
    assert ctx.value.code == status
    assert TOKEN not in ctx.value.message
    assert TOKEN not in str(ctx.value)
    assert "media/m1?access_token=***" in ctx.value.message


def test_upstream_oauth_error_raises_authentication_error(client: InstagramClient, transport) -> None:
    transport.reply = lambda request: httpx.Response(
        400,
        json={"meta": {"error_type": "OAuthParameterException", "error_message": "bad token", "code": 400}},
    )
    with pytest.raises(AuthenticationError) as ctx:
        client.get_user()
    assert str(ctx.value) == "[OAuthParameterException]: bad token"
    assert ctx.value.code == 400


def test_connection_failure_raises_transport_error(client: InstagramClient, transport) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    transport.reply = fail
    with pytest.raises(GenericError) as ctx:
        client.get_user()
    assert isinstance(ctx.value, TransportError)
    assert ctx.value.message == "boom"
    assert ctx.value.code is None
    assert isinstance(ctx.value.__cause__, httpx.ConnectError)


def test_undecodable_success_body_raises_generic_error(client: InstagramClient, transport) -> None:
    transport.reply = lambda request: httpx.Response(200, text="<html>")
    with pytest.raises(GenericError):
        client.get_user()


def test_requests_are_logged_without_token(client: InstagramClient, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="instagram_client")
    client.get_user("42")
    assert "GET users/:id" in caplog.text
    assert TOKEN not in caplog.text


# ----------------------------------------------------------------------
# Endpoint facade
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    ("call", "expected"),
    [
        (lambda c: c.get_user(), ("users/:id", "GET", {"id": "self"})),
        (lambda c: c.get_user(""), ("users/:id", "GET", {"id": "self"})),
        (lambda c: c.get_user("42"), ("users/:id", "GET", {"id": "42"})),
        (lambda c: c.search_user("jack"), ("users/search", "GET", {"q": "jack", "count": 20})),
        (lambda c: c.search_user("jack", 0), ("users/search", "GET", {"q": "jack", "count": 0})),
        (
            lambda c: c.get_user_media(),
            ("users/:id/media/recent", "GET", {"id": "self", "count": 20}),
        ),
        (
            lambda c: c.get_user_media("42", 5, "1", "9"),
            ("users/:id/media/recent", "GET", {"id": "42", "count": 5, "min_id": "1", "max_id": "9"}),
        ),
        (
            lambda c: c.get_user_liked(max_like_id="3"),
            ("users/self/media/liked", "GET", {"count": 20, "max_like_id": "3"}),
        ),
        (lambda c: c.get_user_feed(limit=3), ("users/self/feed", "GET", {"count": 3})),
        (lambda c: c.search_tags("snow"), ("tags/search", "GET", {"q": "snow"})),
        (lambda c: c.get_tag("#nofilter"), ("tags/:tag", "GET", {"tag": "nofilter"})),
        (lambda c: c.get_tag(" nofilter"), ("tags/:tag", "GET", {"tag": "nofilter"})),
        (
            lambda c: c.get_tagged_media("#snow", 2, max_tag_id="8"),
            ("tags/:tag/media/recent", "GET", {"tag": "snow", "count": 2, "max_tag_id": "8"}),
        ),
        (lambda c: c.get_media("m1"), ("media/:id", "GET", {"id": "m1"})),
        (
            lambda c: c.get_media_by_shortcode("D"),
            ("media/shortcode/:shortcode", "GET", {"shortcode": "D"}),
        ),
        (
            lambda c: c.search_media(48.8, 2.3),
            ("media/search", "GET", {"lat": 48.8, "lng": 2.3}),
        ),
        (lambda c: c.get_media_comments("m1"), ("media/:id/comments", "GET", {"id": "m1"})),
        (
            lambda c: c.add_media_comment("m1", "hi"),
            ("media/:id/comments", "POST", {"id": "m1", "text": "hi"}),
        ),
        (
            lambda c: c.delete_media_comment("m1", "c1"),
            ("media/:id/comments/:comment_id", "DELETE", {"id": "m1", "comment_id": "c1"}),
        ),
        (lambda c: c.get_media_likes("m1"), ("media/:id/likes", "GET", {"id": "m1"})),
        (lambda c: c.like_media("m1"), ("media/:id/likes", "POST", {"id": "m1"})),
        (lambda c: c.unlike_media("m1"), ("media/:id/likes", "DELETE", {"id": "m1"})),
        (lambda c: c.get_follows(), ("users/self/follows", "GET")),
        (lambda c: c.get_followed_by(), ("users/self/followed-by", "GET")),
        (lambda c: c.get_requested_by(), ("users/self/requested-by", "GET")),
        (lambda c: c.get_relationship("7"), ("users/:id/relationship", "GET", {"id": "7"})),
        (
            lambda c: c.modify_relationship("7", "follow"),
            ("users/:id/relationship", "POST", {"id": "7", "action": "follow"}),
        ),
        (lambda c: c.get_location("11"), ("locations/:id", "GET", {"id": "11"})),
        (
            lambda c: c.get_location_media("11", max_id="4"),
            ("locations/:id/media/recent", "GET", {"id": "11", "max_id": "4"}),
        ),
        (
            lambda c: c.search_locations(facebook_places_id="fb1"),
            ("locations/search", "GET", {"facebook_places_id": "fb1"}),
        ),
    ],
)
@patch("instagram_client.client.InstagramClient.execute")
def test_facade_dispatches_template_verb_and_params(mock_execute, call, expected) -> None:
    client, _ = make_client()
    call(client)
    mock_execute.assert_called_once()
    args, kwargs = mock_execute.call_args
    assert args == expected
    assert kwargs == {}


def test_invalid_facade_arguments_fail_before_sending() -> None:
    client, transport = make_client()
    with pytest.raises(InvalidArgumentError):
        client.modify_relationship("7", "block")
    with pytest.raises(InvalidArgumentError):
        client.search_locations(lat=1.0)
    with pytest.raises(InvalidArgumentError):
        client.add_media_comment("m1", "")
    with pytest.raises(InvalidArgumentError):
        client.search_user("")
    assert transport.requests == []


def test_tagged_media_end_to_end(client: InstagramClient, transport) -> None:
    client.get_tagged_media(" #nofilter", limit=0)
    assert str(transport.last.url) == (
        f"https://api.instagram.com/v1/tags/nofilter/media/recent?access_token={TOKEN}&count=0"
    )


# ----------------------------------------------------------------------
# OAuth
# ----------------------------------------------------------------------
def test_login_url_joins_scopes_with_spaces() -> None:
    client, transport = make_client(access_token=None)
    url = httpx.URL(client.get_login_url(["basic", "public_content"]))

    assert url.scheme == "https"
    assert url.host == "api.instagram.com"
    assert url.path == "/oauth/authorize"
    query = parse_qs(url.query.decode())
    assert query == {
        "client_id": [CLIENT_ID],
        "redirect_uri": [REDIRECT_URI],
        "response_type": ["code"],
        "scope": ["basic public_content"],
    }
    assert transport.requests == []


def test_login_url_defaults_to_basic_scope_and_skips_missing_redirect() -> None:
    client, _ = make_client(access_token=None, redirect_uri=None)
    url = client.get_login_url()
    assert url == f"https://api.instagram.com/oauth/authorize?client_id={CLIENT_ID}&response_type=code&scope=basic"


def test_oauth_token_exchange_posts_credentials_without_token() -> None:
    payload = {"access_token": "new-token", "user": {"id": "1", "username": "jack"}}
    client, transport = make_client(
        lambda request: httpx.Response(200, json=payload), access_token=None
    )

    response = client.get_oauth_token("the-code")

    request = transport.last
    assert request.method == "POST"
    assert str(request.url) == "https://api.instagram.com/oauth/access_token"
    assert form(request) == {
        "client_secret": [CLIENT_SECRET],
        "client_id": [CLIENT_ID],
        "grant_type": ["authorization_code"],
        "code": ["the-code"],
        "redirect_uri": [REDIRECT_URI],
    }
    assert response.as_model(AccessToken, path=None).access_token == "new-token"
    assert response.get("user.username") == "jack"
    assert client.has_access_token is False


def test_oauth_token_only_returns_token_string() -> None:
    client, _ = make_client(
        lambda request: httpx.Response(200, json={"access_token": "new-token"}), access_token=None
    )
    assert client.get_oauth_token("the-code", token_only=True) == "new-token"


def test_oauth_token_requires_code() -> None:
    client, transport = make_client(access_token=None)
    with pytest.raises(InvalidArgumentError):
        client.get_oauth_token("")
    assert transport.requests == []
