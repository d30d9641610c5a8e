"""Type definitions for common API response payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow")


class UserCounts(_Payload):
    media: int = Field(0, description="Number of media posted")
    follows: int = Field(0, description="Number of accounts followed")
    followed_by: int = Field(0, description="Number of followers")


class User(_Payload):
    """User model returned by the users endpoints."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    full_name: str | None = Field(None, description="Display name")
    profile_picture: str | None = Field(None, description="Profile picture URL")
    bio: str | None = Field(None, description="Biography")
    website: str | None = Field(None, description="Website URL")
    counts: UserCounts | None = Field(None, description="Counters, only on full user payloads")


class Tag(_Payload):
    name: str = Field(..., description="Tag name without the leading '#'")
    media_count: int = Field(0, description="Number of media carrying the tag")


class Location(_Payload):
    id: str | int | None = Field(None, description="Location ID")
    name: str | None = Field(None, description="Location name")
    latitude: float | None = Field(None, description="Latitude")
    longitude: float | None = Field(None, description="Longitude")


class Comment(_Payload):
    id: str = Field(..., description="Comment ID")
    text: str = Field(..., description="Comment text")
    created_time: str | None = Field(None, description="Unix timestamp as a string")
    from_: User | None = Field(None, alias="from", description="Comment author")


class Media(_Payload):
    """Media model returned by the media, tag, location and feed endpoints."""

    id: str = Field(..., description="Media ID")
    type: str = Field(..., description="Media type: 'image', 'video' or 'carousel'")
    link: str | None = Field(None, description="Permalink")
    created_time: str | None = Field(None, description="Unix timestamp as a string")
    tags: list[str] = Field(default_factory=list, description="Tags on the media")
    user: User | None = Field(None, description="Owner")
    images: dict[str, Any] | None = Field(None, description="Image renditions by size")
    location: Location | None = Field(None, description="Location, if tagged")


class Relationship(_Payload):
    outgoing_status: str | None = Field(None, description="'follows', 'requested' or 'none'")
    incoming_status: str | None = Field(
        None, description="'followed_by', 'requested_by', 'blocked_by_you' or 'none'"
    )
    target_user_is_private: bool | None = Field(None, description="Whether the target is private")


class AccessToken(_Payload):
    """Body of a successful OAuth code exchange."""

    access_token: str = Field(..., description="Access token for authenticated calls")
    user: User | None = Field(None, description="User that authorized the application")
