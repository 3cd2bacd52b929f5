"""
Seattle Food Truck API Client
=============================

Read-only async client for https://www.seattlefoodtruck.com/api.

Every operation is a single GET decoded into the models in
seafoodtruck_bot.foodtruck.models. There are no retries: a failed call
raises and the caller decides what to tell the user.

Errors:
- HTTP 404                        -> NotFoundError
- any other HTTP status >= 400    -> TransportError (with status_code)
- network failure, bad JSON/shape -> TransportError

API Notes:
- Uses httpx for async HTTP requests
- The same httpx.AsyncClient is reused for every call; close it with
  aclose() at shutdown
"""

from typing import Any, Iterable
from urllib.parse import quote

import httpx

from seafoodtruck_bot.errors import MissingArgumentError, NotFoundError, TransportError
from seafoodtruck_bot.foodtruck.days import resolve_day
from seafoodtruck_bot.foodtruck.models import Event, Location, Neighborhood, Truck
from seafoodtruck_bot.utils.config import FoodTruckConfig
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("FoodTruckClient")

USER_AGENT = "seafoodtruck-slack/1.0.0/python"

EVENTS_PATH = "/events"
LOCATIONS_PATH = "/locations"
LOCATION_PATH = "/locations/{id}"
NEIGHBORHOOD_PATH = "/neighborhoods/{id}"
TRUCK_PATH = "/trucks/{id}"


def _segment(value: str) -> str:
    """Percent-encode a user supplied id for use as one path segment."""
    encoded = quote(value, safe="")
    # Bare dot segments would be collapsed during URL normalization
    if encoded in (".", ".."):
        encoded = encoded.replace(".", "%2E")
    return encoded


def _normalize_id(value: str) -> str:
    return value.strip().lower()


def filter_locations(locations: Iterable[Location], wanted_ids: Iterable[str]) -> list[Location]:
    """
    Keep the locations whose id matches one of `wanted_ids`.

    Ids are compared trimmed and case-insensitively. The result follows
    the order of `wanted_ids`.
    """
    by_id: dict[str, Location] = {}
    for location in locations:
        by_id.setdefault(_normalize_id(location.id), location)

    matched = []
    for wanted in wanted_ids:
        location = by_id.get(_normalize_id(wanted))
        if location is not None:
            matched.append(location)
    return matched


class FoodTruckClient:
    """
    Typed access to locations, neighborhoods, events and trucks.

    Example:
        client = FoodTruckClient(config.foodtruck)

        location = await client.get_location("westlake-park")
        events = await client.get_events(location.id, "tomorrow")

        await client.aclose()
    """

    def __init__(
        self,
        config: FoodTruckConfig,
        http_client: httpx.AsyncClient | None = None
    ):
        """
        Args:
            config: API base URL and timeout
            http_client: Preconfigured client (tests pass one with a
                MockTransport); one is created when omitted
        """
        self.base_url = config.base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def _get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        resource: str = "resource",
        resource_id: str = ""
    ) -> Any:
        """
        GET a path under the API base and return the decoded JSON.

        Args:
            path: Path below the base URL (e.g. /locations/123)
            params: Query string parameters
            resource: Resource name for NotFoundError
            resource_id: Resource id for NotFoundError
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {path}", params or None)

        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(resource, resource_id)
        if response.status_code >= 400:
            raise TransportError(
                f"Food truck API error {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {path}: {e}") from e

    @staticmethod
    def _decode(decoder, data: Any, what: str):
        try:
            return decoder(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise TransportError(f"Unexpected {what} payload: {e}") from e

    async def get_location(self, location_id: str) -> Location:
        """
        Fetch a single location.

        Raises:
            MissingArgumentError: If the id is empty
            NotFoundError: If the API does not know the location
            TransportError: On network or decoding failure
        """
        if not location_id:
            raise MissingArgumentError("location", "Location ID is missing")
        data = await self._get(
            LOCATION_PATH.format(id=_segment(location_id)),
            resource="location",
            resource_id=location_id,
        )
        return self._decode(Location.from_dict, data, "location")

    async def get_neighborhood(self, neighborhood_id: str) -> Neighborhood:
        """Fetch a neighborhood by its id."""
        if not neighborhood_id:
            raise MissingArgumentError("neighborhood", "Neighborhood ID is missing")
        data = await self._get(
            NEIGHBORHOOD_PATH.format(id=_segment(neighborhood_id)),
            resource="neighborhood",
            resource_id=neighborhood_id,
        )
        return self._decode(Neighborhood.from_dict, data, "neighborhood")

    async def find_trucks(
        self,
        neighborhood_id: str,
        location_ids: Iterable[str],
        day: str | None
    ) -> list[Location]:
        """
        Search a neighborhood for locations with booked trucks on a day.

        Args:
            neighborhood_id: Neighborhood to search
            location_ids: Only these locations are returned, in this order
            day: "today" or "tomorrow" (anything else means today)

        Returns:
            Matching locations, each carrying its events and trucks
        """
        params = {
            "only_with_events": "true",
            "with_active_trucks": "true",
            "include_events": "true",
            "include_trucks": "true",
            "with_events_on_day": resolve_day(day),
            "neighborhood": neighborhood_id,
        }
        data = await self._get(LOCATIONS_PATH, params=params, resource="locations")

        def decode(payload: Any) -> list[Location]:
            return [Location.from_dict(item) for item in payload.get("locations") or []]

        locations = self._decode(decode, data, "locations")
        matched = filter_locations(locations, location_ids)
        logger.debug(f"Found {len(locations)} locations, {len(matched)} requested")
        return matched

    async def get_events(self, location_id: str, day: str | None) -> list[Event]:
        """
        Fetch the events at a location for a day, with approved bookings.
        """
        if not location_id:
            raise MissingArgumentError("location", "Location ID is missing")
        params = {
            "include_bookings": "true",
            "with_active_trucks": "true",
            "with_booking_status": "approved",
            "on_day": resolve_day(day),
            "for_locations": location_id,
        }
        data = await self._get(EVENTS_PATH, params=params, resource="events", resource_id=location_id)

        def decode(payload: Any) -> list[Event]:
            return [Event.from_dict(item) for item in payload.get("events") or []]

        return self._decode(decode, data, "events")

    async def get_truck(self, truck_id: str) -> Truck:
        """Fetch a truck with its rating and review count."""
        if not truck_id:
            raise MissingArgumentError("truck", "Truck ID is required")
        data = await self._get(
            TRUCK_PATH.format(id=_segment(truck_id)),
            resource="truck",
            resource_id=truck_id,
        )
        return self._decode(Truck.from_dict, data, "truck")
