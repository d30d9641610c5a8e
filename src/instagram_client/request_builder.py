"""
Turns path templates and parameter mappings into request URLs.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote, urlencode

from ._utils import encode_items, format_param, is_absent
from .config import ClientConfig
from .errors import InvalidArgumentError

PLACEHOLDER = re.compile(r"^:([A-Za-z_][A-Za-z0-9_]*)$")


class Verb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in BODY_VERBS


BODY_VERBS = frozenset({Verb.POST, Verb.PUT, Verb.PATCH})


@dataclass(slots=True)
class BuiltRequest:
    url: str
    # Leftover parameters to send form-encoded; always empty for GET/DELETE
    body: dict[str, str] = field(default_factory=dict)


def coerce_verb(verb: Verb | str) -> Verb:
    try:
        return Verb(verb.upper())
    except (AttributeError, ValueError) as exc:
        raise InvalidArgumentError(f"Unsupported HTTP verb '{verb}'") from exc


def is_absolute_url(path: str) -> bool:
    lowered = path.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


def append_query(url: str, params: Mapping[str, Any]) -> str:
    query = urlencode(list(encode_items(params)))
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def substitute_placeholders(
    path: str,
    params: dict[str, Any],
    *,
    strict: bool = False,
) -> str:
    """
    Replace every ``:name`` segment of ``path`` with the popped value of ``name``.

    Consumed keys are removed from ``params``. A missing or absent value
    yields an empty segment unless ``strict`` is set.
    """
    segments = path.split("/")
    for index, segment in enumerate(segments):
        match = PLACEHOLDER.match(segment)
        if match is None:
            continue
        name = match.group(1)
        value = params.pop(name, None)
        if is_absent(value):
            if strict:
                raise InvalidArgumentError(f"Missing value for path placeholder ':{name}' in '{path}'")
            segments[index] = ""
            continue
        segments[index] = quote(format_param(value), safe="")
    return "/".join(segments)


class RequestBuilder:
    def __init__(self, config: ClientConfig, token_getter: Callable[[], str]) -> None:
        self._config = config
        self._token_getter = token_getter

    def build(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        raw: bool = False,
        verb: Verb | str = Verb.GET,
    ) -> BuiltRequest:
        """
        Build the URL for ``path``.

        Non-raw URLs are versioned and carry the access token as the first
        query parameter. Raw URLs carry neither. Parameters left after
        placeholder substitution go to the query string for GET/DELETE and to
        ``BuiltRequest.body`` for POST/PUT/PATCH.

        Raises:
            InvalidArgumentError: on an empty path or non-mapping params.
            AuthenticationError: when a non-raw URL is built without a token.
        """
        if not path:
            raise InvalidArgumentError("Path needs to be set and not empty")
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise InvalidArgumentError("Params must be a mapping")
        verb = coerce_verb(verb)

        leftover = dict(params)
        templated = substitute_placeholders(
            path.lstrip("/"), leftover, strict=self._config.strict_placeholders
        )

        if raw:
            url = f"{self._config.base_url}/{templated}"
        else:
            leftover.pop("access_token", None)
            token = self._token_getter()
            url = (
                f"{self._config.base_url}/v{self._config.api_version}/{templated}"
                f"?access_token={quote(token, safe='')}"
            )

        if verb.has_body:
            return BuiltRequest(url=url, body=dict(encode_items(leftover)))
        return BuiltRequest(url=append_query(url, leftover))
