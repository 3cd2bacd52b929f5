"""
Response Assembler
==================

Decides what to say for a parsed Command and builds the answer as an
ordered list of MessageSections.

Commands:
- help:        one section listing the commands, with a timestamp footer
- find trucks: trucks booked at one location (optionally in a given
               neighborhood) today or tomorrow
- find events: trucks booked at the configured locations; this is also
               what the weekday broadcast posts
- anything else: a polite "cannot help"

Lookup Flow (find trucks):
    1. Resolve the location
    2. Resolve its neighborhood, unless one was given
    3. Search the neighborhood for booked trucks on the day
    4. Render each event with bookings: a header, then one section per truck

Any failed lookup stops the flow and the whole answer becomes a single
"having trouble" section. Not-found and transport errors are logged
differently but look the same in chat. Nothing is retried.
"""

import asyncio
from datetime import datetime
from typing import Iterable, Sequence

from seafoodtruck_bot.bot import formatting
from seafoodtruck_bot.bot.parser import Command, parse
from seafoodtruck_bot.bot.sections import Divider, ImageSection, MessageSection, TextSection
from seafoodtruck_bot.errors import EmptyInputError, LookupFailedError, MissingArgumentError
from seafoodtruck_bot.foodtruck.client import FoodTruckClient
from seafoodtruck_bot.foodtruck.days import TODAY
from seafoodtruck_bot.foodtruck.models import Booking, Event, Location, Truck
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Assembler")

HELP_COMMAND = "help"
FIND_TRUCKS_COMMAND = "find trucks"
FIND_EVENTS_COMMAND = "find events"

HELP_TITLE = "You can ask me"
HELP_FOOTER = "Slack Events API"
HELP_LINES = (
    f"`{HELP_COMMAND}`",
    f"`{FIND_TRUCKS_COMMAND} at <location> in <neighborhood> <today/tomorrow>`"
    " - to see food trucks at a location",
    f"`{FIND_EVENTS_COMMAND} for <today/tomorrow>` - to see events booked",
)

CANNOT_HELP_TEXT = "Sorry I cannot help you with this, please try help to see things you can ask me"
EMPTY_INPUT_TEXT = "Hi! Try `help` to see the things you can ask me"
TROUBLE_TEXT = "Sorry I'm having trouble getting food truck details right now, please try again later"
MISSING_LOCATION_TEXT = "To find trucks a location is required, try `find trucks at <location>`"
MISSING_CONFIGURED_LOCATIONS_TEXT = "Locations are not set, ask an admin to configure LOCATION_IDS"
NO_RESULTS_TEXT = "No food trucks are booked for {day}"


class ResponseAssembler:
    """
    Builds the sections answering a command.

    Example:
        assembler = ResponseAssembler(client, location_ids=("123",))

        sections = await assembler.respond_to_text("find events for tomorrow")
        # [TextSection(header), ImageSection(truck), ImageSection(truck)]
    """

    def __init__(
        self,
        client: FoodTruckClient,
        location_ids: Sequence[str] = ()
    ):
        """
        Args:
            client: Food truck API client
            location_ids: Locations searched by "find events" and the broadcast
        """
        self.client = client
        self.location_ids = tuple(location_ids)

    async def respond_to_text(self, text: str) -> list[MessageSection]:
        """
        Parse mention text and build the answer.

        Empty text gets a short hint instead of an error.
        """
        try:
            command = parse(text)
        except EmptyInputError:
            logger.info("Empty mention, sending hint")
            return [TextSection(EMPTY_INPUT_TEXT)]
        return await self.build_response(command)

    async def build_response(self, command: Command) -> list[MessageSection]:
        """
        Build the answer for a parsed command.

        Args:
            command: The parsed mention

        Returns:
            Sections in display order, never empty
        """
        name = command.name
        logger.info(f"Command: {name!r}", {"args": list(command.args)} if command.args else None)

        if name == HELP_COMMAND:
            return self.help_sections()
        if name == FIND_TRUCKS_COMMAND:
            return await self.find_trucks(command)
        if name == FIND_EVENTS_COMMAND:
            return await self.find_events(command.resolved_day)
        return [TextSection(CANNOT_HELP_TEXT)]

    # ==========================================================================
    # help
    # ==========================================================================

    def help_sections(self, now: datetime | None = None) -> list[MessageSection]:
        """The static command list with a Pacific time footer."""
        commands = "\n".join(f"• {line}" for line in HELP_LINES)
        footer = f"_{HELP_FOOTER} | {formatting.display_time(now)}_"
        return [TextSection(f"*{HELP_TITLE}*\n{commands}\n\n{footer}")]

    # ==========================================================================
    # find trucks
    # ==========================================================================

    async def find_trucks(self, command: Command) -> list[MessageSection]:
        """
        Trucks booked at the location named in the command.
        """
        if not command.location:
            logger.warning("find trucks without a location")
            return [TextSection(MISSING_LOCATION_TEXT)]

        day = command.resolved_day

        try:
            location = await self.client.get_location(command.location)

            neighborhood_id = command.neighborhood
            if not neighborhood_id:
                neighborhood = await self.client.get_neighborhood(location.neighborhood_id)
                neighborhood_id = neighborhood.id

            locations = await self.client.find_trucks(neighborhood_id, [location.id], day)
        except (LookupFailedError, MissingArgumentError) as e:
            return self._trouble("find trucks", e)

        logger.info(f"Found {len(locations)} location(s) with trucks for {day}")
        return await self._render_locations(
            ((loc, loc.events) for loc in locations),
            day,
        )

    # ==========================================================================
    # find events
    # ==========================================================================

    async def find_events(self, day: str = TODAY) -> list[MessageSection]:
        """
        Trucks booked at every configured location.

        Args:
            day: "today" or "tomorrow"
        """
        if not self.location_ids:
            logger.warning("find events without configured locations")
            return [TextSection(MISSING_CONFIGURED_LOCATIONS_TEXT)]

        found: list[tuple[Location, list[Event]]] = []
        for location_id in self.location_ids:
            try:
                location = await self.client.get_location(location_id)
                events = await self.client.get_events(location_id, day)
            except (LookupFailedError, MissingArgumentError) as e:
                return self._trouble("find events", e)

            if not events:
                logger.info(f"No events at {location_id}, skipping")
                continue
            found.append((location, events))

        return await self._render_locations(found, day)

    # ==========================================================================
    # rendering
    # ==========================================================================

    def _trouble(self, what: str, error: Exception) -> list[MessageSection]:
        logger.error(f"{what} stopped: lookup failed", error)
        return [TextSection(TROUBLE_TEXT)]

    async def _render_locations(
        self,
        found: Iterable[tuple[Location, Sequence[Event]]],
        day: str
    ) -> list[MessageSection]:
        """
        Header and truck sections for every event with bookings.

        Locations are separated by a divider; events without bookings
        are skipped entirely.
        """
        sections: list[MessageSection] = []

        for location, events in found:
            location_sections: list[MessageSection] = []
            for event in events:
                if not event.has_bookings:
                    logger.debug(f"Event {event.id} at {location.id} has no bookings, skipping")
                    continue
                location_sections.append(self._event_header(location, event))
                location_sections.extend(await self._booking_sections(event.bookings))

            if not location_sections:
                continue
            if sections:
                sections.append(Divider())
            sections.extend(location_sections)

        if not sections:
            return [TextSection(NO_RESULTS_TEXT.format(day=day))]
        return sections

    def _event_header(self, location: Location, event: Event) -> TextSection:
        """Location link, truck count, day and time range."""
        title = f"*{formatting.link(formatting.location_url(location.id), location.name)}*"
        trucks = f"*{len(event.bookings)} truck(s)*"

        start = formatting.parse_timestamp(event.start_time)
        end = formatting.parse_timestamp(event.end_time)
        if start is None or end is None:
            return TextSection(f"{title}\n{trucks}")

        when = (
            f"on {formatting.event_day(start)} from "
            f"{formatting.clock_time(start)}–{formatting.clock_time(end)}"
        )
        return TextSection(f"{title}\n{trucks} {when}")

    async def _booking_sections(self, bookings: Sequence[Booking]) -> list[MessageSection]:
        # Ratings only come with the full truck resource
        details = await asyncio.gather(*(self._lookup_truck(b.truck.id) for b in bookings))
        return [
            self._truck_section(booking.truck, detail)
            for booking, detail in zip(bookings, details)
        ]

    async def _lookup_truck(self, truck_id: str) -> Truck | None:
        """The full truck, or None when it cannot be fetched."""
        try:
            return await self.client.get_truck(truck_id)
        except (LookupFailedError, MissingArgumentError) as e:
            logger.warning(f"No rating for truck {truck_id!r}", {"error": str(e)})
            return None

    def _truck_section(self, truck: Truck, detail: Truck | None) -> MessageSection:
        """
        Truck link, stars, review count, categories and photo.

        The booked truck supplies name and categories; the detailed truck
        supplies rating and fills in anything the booking left out.
        """
        name = truck.name or (detail.name if detail else truck.id)
        lines = [f"*{formatting.link(formatting.truck_url(truck.id), name)}*"]
        if detail is not None:
            lines[0] += (
                f" {formatting.star_rating(detail.rating)}"
                f" ({detail.rating:.1f}) {detail.rating_count} reviews"
            )

        categories = truck.food_categories or (detail.food_categories if detail else ())
        lines.extend(formatting.category_line(c) for c in categories)
        text = "\n".join(lines)

        photo = truck.featured_photo or (detail.featured_photo if detail else None)
        if not photo:
            return TextSection(text)
        return ImageSection(text=text, image_url=formatting.photo_url(photo), alt_text=name)
