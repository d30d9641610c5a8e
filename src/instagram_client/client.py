"""
High-level synchronous client for the Instagram API.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx

from ._constants import DEFAULT_USER_AGENT
from ._utils import encode_items
from .config import ClientConfig, build_config, load_config
from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    InvalidArgumentError,
    TransportError,
    classify_http_error,
    mask_access_token,
)
from .log import LOG, bound_logging_vars
from .request_builder import BuiltRequest, RequestBuilder, Verb, append_query, coerce_verb, is_absolute_url
from .resources.locations import LocationsAPI
from .resources.media import MediaAPI
from .resources.oauth import OAuthAPI
from .resources.relationships import RelationshipAction, RelationshipsAPI
from .resources.tags import TagsAPI
from .resources.users import UsersAPI
from .response import StructuredResponse


class BaseInstagramClient:
    """
    State and request preparation shared by the sync and async clients.

    Subclasses own the httpx client and implement ``execute``.
    """

    def __init__(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
        protocol: str = "https",
        config: ClientConfig | None = None,
        access_token: str | None = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = build_config(
                client_id=client_id,
                client_secret=client_secret,
                redirect_uri=redirect_uri,
                protocol=protocol,
                **options,
            )
        elif (
            options
            or client_id is not None
            or client_secret is not None
            or redirect_uri is not None
            or protocol != "https"
        ):
            raise ConfigurationError("Pass either config or individual settings, not both")

        self._config = config
        self._access_token: str | None = None
        if access_token is not None:
            self.set_access_token(access_token)

        self._builder = RequestBuilder(config, self.get_access_token)
        self._headers = {
            "User-Agent": config.user_agent or DEFAULT_USER_AGENT,
            "Accept": "application/json",
        }

        self.users = UsersAPI(self)
        self.media = MediaAPI(self)
        self.comments = self.media.comments
        self.likes = self.media.likes
        self.relationships = RelationshipsAPI(self)
        self.tags = TagsAPI(self)
        self.locations = LocationsAPI(self)
        self.oauth = OAuthAPI(self)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any):
        return cls(config=config, **kwargs)

    @classmethod
    def from_env(
        cls,
        config_file: str | Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
        **kwargs: Any,
    ):
        """Build a client from ``INSTAGRAM_*`` variables, a ``.env`` file and optional YAML."""
        return cls(config=load_config(config_file, env=env), **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Access token
    # ------------------------------------------------------------------
    @property
    def access_token(self) -> str:
        return self.get_access_token()

    @access_token.setter
    def access_token(self, token: str | None) -> None:
        self.set_access_token(token)

    @property
    def has_access_token(self) -> bool:
        return self._access_token is not None

    def get_access_token(self) -> str:
        if self._access_token is None:
            raise AuthenticationError("Access token is not set")
        return self._access_token

    def set_access_token(self, token: str | None) -> None:
        """Set the token used by authenticated calls. ``None`` clears it."""
        if token is not None and (not isinstance(token, str) or not token):
            raise InvalidArgumentError("Access token must be a non-empty string")
        self._access_token = token

    # ------------------------------------------------------------------
    # Request preparation shared by both transports
    # ------------------------------------------------------------------
    def get_limit_size(self, override: int | None = None) -> int:
        if override is None:
            return self._config.default_limit
        return override

    def build(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        raw: bool = False,
        verb: Verb | str = Verb.GET,
    ) -> BuiltRequest:
        return self._builder.build(path, params, raw=raw, verb=verb)

    def _prepare(
        self,
        path: str,
        verb: Verb | str,
        params: Mapping[str, Any] | None,
    ) -> tuple[Verb, str, dict[str, str] | None]:
        verb = coerce_verb(verb)
        if not path:
            raise InvalidArgumentError("Path needs to be set and not empty")

        if is_absolute_url(path):
            params = params or {}
            if not isinstance(params, Mapping):
                raise InvalidArgumentError("Params must be a mapping")
            if verb.has_body:
                return verb, path, dict(encode_items(params)) or None
            return verb, append_query(path, params), None

        built = self._builder.build(path, params, raw=False, verb=verb)
        return verb, built.url, built.body or None

    @staticmethod
    def _log_target(path: str) -> str:
        # Absolute URLs may carry secrets in the query string
        return path.split("?", 1)[0]

    @staticmethod
    def _handle_response(response: httpx.Response) -> StructuredResponse:
        if response.status_code >= 400:
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                error = classify_http_error(exc)
                LOG.warning(
                    f"Request failed: kind={error.kind.value} code={error.code} status={error.status_code}"
                )
                raise error from exc
        return StructuredResponse.from_httpx(response)

    @staticmethod
    def _transport_error(exc: httpx.RequestError) -> APIError:
        message = mask_access_token(str(exc)) or exc.__class__.__name__
        LOG.warning(f"Transport failure: {message}")
        return TransportError(message)

    # ------------------------------------------------------------------
    # Endpoint facade
    # ------------------------------------------------------------------
    def get_user(self, user_id: str | int = "self") -> Any:
        return self.users.get(user_id)

    def search_user(self, name: str, limit: int | None = None) -> Any:
        return self.users.search(name, limit=limit)

    def get_user_media(
        self,
        user_id: str | int = "self",
        limit: int | None = None,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        return self.users.recent_media(user_id, limit=limit, min_id=min_id, max_id=max_id)

    def get_user_liked(self, limit: int | None = None, max_like_id: str | None = None) -> Any:
        return self.users.liked(limit=limit, max_like_id=max_like_id)

    def get_user_feed(
        self,
        limit: int | None = None,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        return self.users.feed(limit=limit, min_id=min_id, max_id=max_id)

    def search_tags(self, q: str) -> Any:
        return self.tags.search(q)

    def get_tag(self, tag: str) -> Any:
        return self.tags.get(tag)

    def get_tagged_media(
        self,
        tag: str,
        limit: int | None = None,
        min_tag_id: str | None = None,
        max_tag_id: str | None = None,
    ) -> Any:
        return self.tags.recent_media(
            tag, limit=limit, min_tag_id=min_tag_id, max_tag_id=max_tag_id
        )

    def get_media(self, media_id: str) -> Any:
        return self.media.get(media_id)

    def get_media_by_shortcode(self, shortcode: str) -> Any:
        return self.media.get_by_shortcode(shortcode)

    def search_media(self, lat: float, lng: float, distance: int | None = None) -> Any:
        return self.media.search(lat=lat, lng=lng, distance=distance)

    def get_media_comments(self, media_id: str) -> Any:
        return self.comments.list(media_id)

    def add_media_comment(self, media_id: str, text: str) -> Any:
        return self.comments.create(media_id, text=text)

    def delete_media_comment(self, media_id: str, comment_id: str) -> Any:
        return self.comments.delete(media_id, comment_id)

    def get_media_likes(self, media_id: str) -> Any:
        return self.likes.list(media_id)

    def like_media(self, media_id: str) -> Any:
        return self.likes.like(media_id)

    def unlike_media(self, media_id: str) -> Any:
        return self.likes.unlike(media_id)

    def get_follows(self) -> Any:
        return self.relationships.follows()

    def get_followed_by(self) -> Any:
        return self.relationships.followed_by()

    def get_requested_by(self) -> Any:
        return self.relationships.requested_by()

    def get_relationship(self, user_id: str | int) -> Any:
        return self.relationships.get(user_id)

    def modify_relationship(self, user_id: str | int, action: RelationshipAction) -> Any:
        return self.relationships.modify(user_id, action)

    def get_location(self, location_id: str | int) -> Any:
        return self.locations.get(location_id)

    def get_location_media(
        self,
        location_id: str | int,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        return self.locations.recent_media(location_id, min_id=min_id, max_id=max_id)

    def search_locations(
        self,
        lat: float | None = None,
        lng: float | None = None,
        distance: int | None = None,
        facebook_places_id: str | None = None,
    ) -> Any:
        return self.locations.search(
            lat=lat, lng=lng, distance=distance, facebook_places_id=facebook_places_id
        )

    def get_login_url(self, scopes: Sequence[str] | None = None) -> str:
        return self.oauth.login_url(scopes)


class InstagramClient(BaseInstagramClient):
    """
    Synchronous HTTP client for the Instagram REST API.

    Example::

        from instagram_client import InstagramClient

        with InstagramClient(client_id="...", client_secret="...", redirect_uri="https://app/cb") as client:
            print(client.get_login_url(["basic", "public_content"]))
            client.set_access_token(client.get_oauth_token(code, token_only=True))
            me = client.get_user()
            print(me.get("data.username"))
    """

    def __init__(self, *, client: httpx.Client | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)

        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.Client(
                headers=self._headers,
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
            )
            self._owns_client = True

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "InstagramClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401 - standard context manager protocol
        self.close()

    # ------------------------------------------------------------------
    # HTTP plumbing shared by resource clients
    # ------------------------------------------------------------------
    def execute(
        self,
        path: str,
        verb: Verb | str = Verb.GET,
        params: Mapping[str, Any] | None = None,
    ) -> StructuredResponse:
        verb, url, data = self._prepare(path, verb, params)

        with bound_logging_vars(verb=verb.value, path=self._log_target(path)):
            LOG.debug(f"{verb.value} {self._log_target(path)}")
            try:
                response = self._client.request(
                    verb.value,
                    url,
                    data=data,
                    headers=self._headers,
                    timeout=self._config.timeout,
                )
            except httpx.RequestError as exc:
                raise self._transport_error(exc) from exc

            return self._handle_response(response)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return self.execute(path, Verb.GET, params)

    def post(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return self.execute(path, Verb.POST, params)

    def put(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return self.execute(path, Verb.PUT, params)

    def patch(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return self.execute(path, Verb.PATCH, params)

    def delete(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return self.execute(path, Verb.DELETE, params)

    def get_oauth_token(self, code: str, token_only: bool = False) -> Any:
        """
        Exchange an OAuth ``code`` for an access token.

        Returns the whole response, or only its ``access_token`` field when
        ``token_only`` is set. The token is not stored on the client.
        """
        response = self.oauth.exchange_code(code)
        if token_only:
            return response.get("access_token")
        return response
