"""
Tags endpoints.
"""

from typing import Any

from .._utils import build_params
from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError


def normalize_tag(tag: str) -> str:
    """Strip leading '#' marks and surrounding whitespace: ``' #nofilter'`` -> ``'nofilter'``."""
    return tag.lstrip("# ").rstrip()


class TagsAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def get(self, tag: str) -> Any:
        return self._requester.execute("tags/:tag", "GET", {"tag": normalize_tag(tag)})

    def search(self, q: str) -> Any:
        if not q:
            raise InvalidArgumentError("q is required")
        return self._requester.execute("tags/search", "GET", {"q": q})

    def recent_media(
        self,
        tag: str,
        *,
        limit: int | None = None,
        min_tag_id: str | None = None,
        max_tag_id: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {"tag": normalize_tag(tag)}
        params.update(
            build_params(
                count=self._requester.get_limit_size(limit),
                min_tag_id=min_tag_id,
                max_tag_id=max_tag_id,
            )
        )
        return self._requester.execute("tags/:tag/media/recent", "GET", params)
