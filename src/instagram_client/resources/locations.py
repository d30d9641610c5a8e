"""
Locations endpoints.
"""

from typing import Any

from .._utils import build_params
from ..client_types import RequesterProtocol
from ..errors import InvalidArgumentError


class LocationsAPI:
    def __init__(self, requester: RequesterProtocol) -> None:
        self._requester = requester

    def get(self, location_id: str | int) -> Any:
        return self._requester.execute("locations/:id", "GET", {"id": location_id})

    def recent_media(
        self,
        location_id: str | int,
        *,
        min_id: str | None = None,
        max_id: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {"id": location_id}
        params.update(build_params(min_id=min_id, max_id=max_id))
        return self._requester.execute("locations/:id/media/recent", "GET", params)

    def search(
        self,
        *,
        lat: float | None = None,
        lng: float | None = None,
        distance: int | None = None,
        facebook_places_id: str | None = None,
    ) -> Any:
        """Search locations by coordinates or by Facebook Places ID.

        Args:
            lat: Latitude of the center of the search. Requires ``lng``.
            lng: Longitude of the center of the search. Requires ``lat``.
            distance: Radius in meters. The API defaults to 500, max 750.
            facebook_places_id: Search by a Facebook Places ID instead.
        """
        if facebook_places_id is None and (lat is None or lng is None):
            raise InvalidArgumentError("lat and lng, or facebook_places_id, are required")
        params = build_params(
            lat=lat,
            lng=lng,
            distance=distance,
            facebook_places_id=facebook_places_id,
        )
        return self._requester.execute("locations/search", "GET", params)
