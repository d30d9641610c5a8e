"""
Users endpoints.
"""

from typing import Any

from .._utils import build_params
from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError


class UsersAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def get(self, user_id: str | int = "self") -> Any:
        return self._requester.execute("users/:id", "GET", {"id": user_id or "self"})

    def search(self, name: str, *, limit: int | None = None) -> Any:
        if not name:
            raise InvalidArgumentError("name is required")
        params = {"q": name, "count": self._requester.get_limit_size(limit)}
        return self._requester.execute("users/search", "GET", params)

    def recent_media(
        self,
        user_id: str | int = "self",
        *,
        limit: int | None = None,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {"id": user_id or "self"}
        params.update(
            build_params(
                count=self._requester.get_limit_size(limit),
                min_id=min_id,
                max_id=max_id,
            )
        )
        return self._requester.execute("users/:id/media/recent", "GET", params)

    def liked(self, *, limit: int | None = None, max_like_id: str | None = None) -> Any:
        params = build_params(
            count=self._requester.get_limit_size(limit),
            max_like_id=max_like_id,
        )
        return self._requester.execute("users/self/media/liked", "GET", params)

    def feed(
        self,
        *,
        limit: int | None = None,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        params = build_params(
            count=self._requester.get_limit_size(limit),
            min_id=min_id,
            max_id=max_id,
        )
        return self._requester.execute("users/self/feed", "GET", params)
