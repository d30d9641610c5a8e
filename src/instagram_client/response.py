"""
Read-only view over a parsed API response body.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from .errors import GenericError

M = TypeVar("M", bound=BaseModel)

_MISSING = object()


class StructuredResponse:
    """
    Parsed JSON body of a successful call.

    Lookups use dotted paths; list elements are addressed by index::

        response.get("data.username")
        response.get("data.0.id")
        response.get("pagination.next_url", None)
    """

    __slots__ = ("_body", "_status_code")

    def __init__(self, body: Any, *, status_code: int = 200) -> None:
        self._body = body
        self._status_code = status_code

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "StructuredResponse":
        if not response.content:
            return cls({}, status_code=response.status_code)
        try:
            body = response.json()
        except ValueError as exc:
            raise GenericError(
                "Failed to decode JSON response",
                code=response.status_code,
                status_code=response.status_code,
            ) from exc
        return cls(body, status_code=response.status_code)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> Any:
        return self._body

    @property
    def data(self) -> Any:
        return self.get("data")

    @property
    def meta(self) -> Any:
        return self.get("meta")

    @property
    def pagination(self) -> Any:
        return self.get("pagination")

    def get(self, path: str, default: Any = None) -> Any:
        node = self._body
        for part in path.split("."):
            node = _step(node, part)
            if node is _MISSING:
                return default
        return node

    def __getitem__(self, path: str) -> Any:
        value = self.get(path, _MISSING)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.get(path, _MISSING) is not _MISSING

    def to_dict(self) -> Any:
        return self._body

    def as_model(self, model_cls: type[M], path: str | None = "data") -> M:
        """Validate the node at ``path`` (the whole body when ``None``) into ``model_cls``."""
        node = self._body if path is None else self[path]
        return model_cls.model_validate(node)

    def __repr__(self) -> str:
        return f"StructuredResponse(status_code={self._status_code}, body={self._body!r})"


def _step(node: Any, part: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(part, _MISSING)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        # Plain non-negative indexes only
        if not (part.isascii() and part.isdigit()):
            return _MISSING
        try:
            return node[int(part)]
        except IndexError:
            return _MISSING
    return _MISSING
