"""Shared fixtures and payload factories."""

from unittest.mock import AsyncMock

import pytest

from seafoodtruck_bot.foodtruck.client import FoodTruckClient
from seafoodtruck_bot.foodtruck.models import Booking, Event, Location, Neighborhood, Truck


def make_truck(truck_id="marination", name="Marination", **kwargs) -> Truck:
    defaults = {
        "rating": 4.4,
        "rating_count": 120,
        "food_categories": ("Hawaiian", "Asian"),
        "featured_photo": "trucks/marination.jpg",
    }
    defaults.update(kwargs)
    return Truck(id=truck_id, name=name, **defaults)


def make_event(event_id="1", trucks=(), start="2024-05-06T11:00:00-07:00", end="2024-05-06T14:00:00-07:00") -> Event:
    return Event(
        id=event_id,
        name="Lunch",
        start_time=start,
        end_time=end,
        bookings=tuple(Booking(truck=t) for t in trucks),
    )


def make_location(location_id="123", name="Westlake Park", events=()) -> Location:
    return Location(
        id=location_id,
        name=name,
        latitude=47.61,
        longitude=-122.33,
        neighborhood_id="7",
        neighborhood_name="Downtown",
        events=tuple(events),
    )


@pytest.fixture
def truck_factory():
    return make_truck


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def location_factory():
    return make_location


@pytest.fixture
def food_client():
    """A FoodTruckClient stand-in whose coroutine methods are AsyncMocks."""
    client = AsyncMock(spec=FoodTruckClient)
    client.get_location.return_value = make_location()
    client.get_neighborhood.return_value = Neighborhood(id="downtown", name="Downtown", uid=7)
    client.get_truck.side_effect = lambda truck_id: make_truck(truck_id=truck_id, name=truck_id.title())
    client.get_events.return_value = []
    client.find_trucks.return_value = []
    return client
