"""
Relationship endpoints.
"""

from typing import Any, Literal

from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError

RelationshipAction = Literal["follow", "unfollow", "approve", "ignore"]
RELATIONSHIP_ACTIONS = ("follow", "unfollow", "approve", "ignore")


class RelationshipsAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def follows(self) -> Any:
        return self._requester.execute("users/self/follows", "GET")

    def followed_by(self) -> Any:
        return self._requester.execute("users/self/followed-by", "GET")

    def requested_by(self) -> Any:
        return self._requester.execute("users/self/requested-by", "GET")

    def get(self, user_id: str | int) -> Any:
        return self._requester.execute("users/:id/relationship", "GET", {"id": user_id})

    def modify(self, user_id: str | int, action: RelationshipAction) -> Any:
        if action not in RELATIONSHIP_ACTIONS:
            raise InvalidArgumentError(
                f"action must be one of {', '.join(RELATIONSHIP_ACTIONS)}, got '{action}'"
            )
        params = {"id": user_id, "action": action}
        return self._requester.execute("users/:id/relationship", "POST", params)
