"""
Food Truck Domain Models
========================

Read-only snapshots of what the Seattle Food Truck API returns. Each
request builds fresh objects; nothing is cached or mutated.

The API is not consistent about shapes, so decoding is forgiving:
- ids arrive as strings or numbers and are always stored as strings
- food categories are plain strings on bookings but {"name": ...}
  objects on the truck resource
- events from /locations carry "trucks", events from /events carry
  "bookings"; both end up as Booking objects
"""

import math
from dataclasses import dataclass, field
from typing import Any


def _str_id(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _float(value: Any, default: float = 0.0) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    # NaN and infinities cannot be rounded or displayed
    return result if math.isfinite(result) else default


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _categories(raw: Any) -> tuple[str, ...]:
    """Flatten food categories given as strings or {"name": ...} objects."""
    names = []
    for item in raw or []:
        if isinstance(item, dict):
            name = item.get("name")
        else:
            name = item
        if name:
            names.append(str(name))
    return tuple(names)


def _require_mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for {what}, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Truck:
    """
    A food truck.

    Attributes:
        id: Slug-like identifier used in URLs (e.g. "marination")
        name: Display name
        rating: Average rating, 0.0 to 5.0
        rating_count: Number of reviews
        food_categories: Category labels in API order
        featured_photo: Path of the featured photo in the uploads bucket
    """
    id: str
    name: str
    rating: float = 0.0
    rating_count: int = 0
    food_categories: tuple[str, ...] = ()
    featured_photo: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Truck":
        data = _require_mapping(data, "truck")
        return cls(
            id=_str_id(data.get("id")),
            name=data.get("name") or "",
            rating=_float(data.get("rating")),
            rating_count=_int(data.get("rating_count")),
            food_categories=_categories(data.get("food_categories")),
            featured_photo=data.get("featured_photo") or None,
        )


@dataclass(frozen=True)
class Booking:
    """An approved truck reservation for an event slot."""
    truck: Truck
    status: str = "approved"
    id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Booking":
        data = _require_mapping(data, "booking")
        return cls(
            truck=Truck.from_dict(data.get("truck") or {}),
            status=data.get("status") or "approved",
            id=_str_id(data.get("id")),
        )


@dataclass(frozen=True)
class WaitlistEntry:
    """A truck waiting for a slot. Fetched with events, never shown."""
    truck_slug: str
    position: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "WaitlistEntry":
        data = _require_mapping(data, "waitlist entry")
        truck = data.get("truck") or {}
        return cls(truck_slug=truck.get("slug") or "", position=_int(data.get("position")))


@dataclass(frozen=True)
class Event:
    """
    A scheduled gathering of trucks at a location on one day.

    Attributes:
        id: Event identifier
        name: Event name
        start_time: ISO-8601 start timestamp
        end_time: ISO-8601 end timestamp
        bookings: Trucks booked for the event, may be empty
        waitlist: Trucks on the waitlist
    """
    id: str
    name: str
    start_time: str
    end_time: str
    bookings: tuple[Booking, ...] = ()
    waitlist: tuple[WaitlistEntry, ...] = ()

    @property
    def has_bookings(self) -> bool:
        return len(self.bookings) > 0

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        data = _require_mapping(data, "event")
        if "bookings" in data:
            bookings = tuple(Booking.from_dict(b) for b in data.get("bookings") or [])
        else:
            bookings = tuple(
                Booking(truck=Truck.from_dict(t)) for t in data.get("trucks") or []
            )
        return cls(
            id=_str_id(data.get("id")),
            name=data.get("name") or "",
            start_time=data.get("start_time") or "",
            end_time=data.get("end_time") or "",
            bookings=bookings,
            waitlist=tuple(
                WaitlistEntry.from_dict(w) for w in data.get("waitlist_entries") or []
            ),
        )


@dataclass(frozen=True)
class Neighborhood:
    """A Seattle neighborhood served by food trucks."""
    id: str
    name: str
    uid: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Neighborhood":
        data = _require_mapping(data, "neighborhood")
        return cls(
            id=_str_id(data.get("id")),
            name=data.get("name") or "",
            uid=_int(data.get("uid")),
        )


@dataclass(frozen=True)
class Location:
    """
    A place where trucks park.

    Locations returned by the truck search also carry their events for
    the requested day; single-location lookups leave `events` empty.
    """
    id: str
    name: str
    latitude: float = 0.0
    longitude: float = 0.0
    neighborhood_id: str = ""
    neighborhood_name: str = ""
    address: str = ""
    events: tuple[Event, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "Location":
        data = _require_mapping(data, "location")
        neighborhood = data.get("neighborhood") or {}
        neighborhood_id = data.get("neighborhood_id")
        if neighborhood_id in (None, "", 0):
            neighborhood_id = neighborhood.get("id")
        return cls(
            id=_str_id(data.get("id")),
            name=data.get("name") or "",
            latitude=_float(data.get("latitude")),
            longitude=_float(data.get("longitude")),
            neighborhood_id=_str_id(neighborhood_id),
            neighborhood_name=neighborhood.get("name") or "",
            address=data.get("filtered_address") or data.get("address") or "",
            events=tuple(Event.from_dict(e) for e in data.get("events") or []),
        )
