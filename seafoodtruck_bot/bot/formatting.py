"""
Formatting Helpers
==================

Pieces of text the assembler puts into sections: links, star ratings,
food category emoji, and the date/time formats used in headers and the
help footer.
"""

import math
from datetime import datetime
from types import MappingProxyType
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Formatting")

LOCATION_SCHEDULE_URL = "https://www.seattlefoodtruck.com/schedule/{id}"
TRUCK_URL = "https://www.seattlefoodtruck.com/food-trucks/{id}"
PHOTO_URL = "https://s3-us-west-2.amazonaws.com/seattlefoodtruck-uploads-prod/{photo}"

DISPLAY_TIMEZONE = "America/Los_Angeles"

FILLED_STAR = "★"
EMPTY_STAR = "☆"
MAX_STARS = 5

# Read-only, shared by every request
CATEGORY_EMOJI = MappingProxyType({
    "BBQ": ":cut_of_meat:",
    "Beverage": ":cup_with_straw:",
    "Burgers": ":hamburger:",
    "Indian": ":flag-in:",
    "Vegetarian": ":green_salad:",
    "Vegan": ":seedling:",
    "Native American": ":earth_americas:",
    "Asian": ":earth_asia:",
    "Hawaiian": ":pineapple:",
    "Seafood": ":crab:",
    "Sandwiches": ":sandwich:",
    "Italian": ":spaghetti:",
    "Pizza": ":pizza:",
    "Mexican": ":taco:",
    "Tacos": ":taco:",
    "Burritos": ":burrito:",
    "Wraps": ":burrito:",
    "Sushi": ":sushi:",
    "Japanese": ":japan:",
    "Latin American": ":earth_americas:",
    "Breakfast": ":fried_egg:",
    "American": ":flag-us:",
    "Southern": ":face_with_cowboy_hat:",
    "Caribbean": ":palm_tree:",
    "Central Asian": ":earth_asia:",
    "Coffee": ":coffee:",
    "Dessert": ":ice_cream:",
    "Ethiopian": ":flag-et:",
    "European": ":earth_africa:",
    "French": ":flag-fr:",
    "Global": ":globe_with_meridians:",
    "Halal": "حلال",
    "Hot Dogs": ":hotdog:",
    "Mediterranean": ":stuffed_flatbread:",
    "Middle Eastern": ":stuffed_flatbread:",
})


# ==============================================================================
# Links
# ==============================================================================

def link(url: str, label: str) -> str:
    """Slack mrkdwn link."""
    return f"<{url}|{label}>"


def location_url(location_id: str) -> str:
    return LOCATION_SCHEDULE_URL.format(id=location_id)


def truck_url(truck_id: str) -> str:
    return TRUCK_URL.format(id=truck_id)


def photo_url(featured_photo: str) -> str:
    return PHOTO_URL.format(photo=featured_photo)


# ==============================================================================
# Ratings and categories
# ==============================================================================

def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def star_rating(rating: float) -> str:
    """
    Render a rating as five stars.

    Examples:
        4.6 -> ★★★★★
        4.4 -> ★★★★☆
        0.0 -> ☆☆☆☆☆
    """
    if not math.isfinite(rating):
        rating = 0.0
    filled = min(max(round_half_away_from_zero(rating), 0), MAX_STARS)
    return FILLED_STAR * filled + EMPTY_STAR * (MAX_STARS - filled)


def category_line(category: str) -> str:
    """A food category with its emoji, or the bare name if none is mapped."""
    emoji = CATEGORY_EMOJI.get(category)
    return f"{emoji} {category}" if emoji else category


# ==============================================================================
# Dates and times
# ==============================================================================

def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None if it is unusable."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp: {value}")
        return None


def clock_time(value: datetime) -> str:
    """12-hour clock time, e.g. 3:04PM."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d}{suffix}"


def event_day(value: datetime) -> str:
    """Short weekday plus month and day, e.g. Mon, October 18."""
    return f"{value:%a}, {value:%B} {value.day}"


def display_time(now: datetime | None = None) -> str:
    """
    Format a moment in Pacific time in RFC 822 style (02 Jan 06 15:04 PST).

    Falls back to the given time unchanged if the zone database is missing.
    """
    now = now or datetime.now().astimezone()
    try:
        now = now.astimezone(ZoneInfo(DISPLAY_TIMEZONE))
    except ZoneInfoNotFoundError as e:
        logger.warning(f"Timezone {DISPLAY_TIMEZONE} unavailable, using local time: {e}")
    return now.strftime("%d %b %y %H:%M %Z").rstrip()
