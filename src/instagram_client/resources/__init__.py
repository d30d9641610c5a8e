"""Resource-specific API helpers for the Instagram client."""

from .locations import LocationsAPI
from .media import MediaAPI, MediaCommentsAPI, MediaLikesAPI
from .oauth import OAuthAPI
from .relationships import RelationshipsAPI
from .tags import TagsAPI, normalize_tag
from .users import UsersAPI

__all__ = [
    "LocationsAPI",
    "MediaAPI",
    "MediaCommentsAPI",
    "MediaLikesAPI",
    "OAuthAPI",
    "RelationshipsAPI",
    "TagsAPI",
    "UsersAPI",
    "normalize_tag",
]
