"""
Seattle Food Truck API
======================

Models, day handling and the async client for the food truck site.
"""

from seafoodtruck_bot.foodtruck.client import FoodTruckClient
from seafoodtruck_bot.foodtruck.days import TODAY, TOMORROW, resolve_day
from seafoodtruck_bot.foodtruck.models import (
    Booking,
    Event,
    Location,
    Neighborhood,
    Truck,
    WaitlistEntry,
)

__all__ = [
    "FoodTruckClient",
    "TODAY",
    "TOMORROW",
    "resolve_day",
    "Booking",
    "Event",
    "Location",
    "Neighborhood",
    "Truck",
    "WaitlistEntry",
]
