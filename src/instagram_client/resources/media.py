"""
Media endpoints, with comments and likes nested under them.
"""

from typing import Any

from .._utils import build_params
from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError


class MediaCommentsAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def list(self, media_id: str) -> Any:
        return self._requester.execute("media/:id/comments", "GET", {"id": media_id})

    def create(self, media_id: str, *, text: str) -> Any:
        if not text:
            raise InvalidArgumentError("text is required")
        params = {"id": media_id, "text": text}
        return self._requester.execute("media/:id/comments", "POST", params)

    def delete(self, media_id: str, comment_id: str) -> Any:
        params = {"id": media_id, "comment_id": comment_id}
        return self._requester.execute("media/:id/comments/:comment_id", "DELETE", params)


class MediaLikesAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def list(self, media_id: str) -> Any:
        return self._requester.execute("media/:id/likes", "GET", {"id": media_id})

    def like(self, media_id: str) -> Any:
        return self._requester.execute("media/:id/likes", "POST", {"id": media_id})

    def unlike(self, media_id: str) -> Any:
        return self._requester.execute("media/:id/likes", "DELETE", {"id": media_id})


class MediaAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester
        self.comments = MediaCommentsAPI(requester)
        self.likes = MediaLikesAPI(requester)

    def get(self, media_id: str) -> Any:
        return self._requester.execute("media/:id", "GET", {"id": media_id})

    def get_by_shortcode(self, shortcode: str) -> Any:
        return self._requester.execute(
            "media/shortcode/:shortcode", "GET", {"shortcode": shortcode}
        )

    def search(self, *, lat: float, lng: float, distance: int | None = None) -> Any:
        params = build_params(lat=lat, lng=lng, distance=distance)
        return self._requester.execute("media/search", "GET", params)
