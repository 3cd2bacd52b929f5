"""
Responder
=========

Glue between inbound events and outbound Slack messages.

Handler Pattern:
    1. A transport (webhook or Socket Mode) hands over a parsed event
    2. URL challenges are answered straight away
    3. Mentions are acknowledged at once and answered from a background
       task, so Slack gets its 200 well within 3 seconds
    4. The task builds sections, renders them and posts the messages in order

The weekday broadcast reuses the same posting path with "find events
for today" at the configured channel.
"""

import asyncio
from typing import Coroutine, Sequence

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from seafoodtruck_bot.bot.assembler import ResponseAssembler
from seafoodtruck_bot.bot.renderer import paginate
from seafoodtruck_bot.bot.sections import MessageSection
from seafoodtruck_bot.foodtruck.days import TODAY
from seafoodtruck_bot.slack.events import InboundEvent, Mention, Unsupported, UrlChallenge
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Responder")


class Responder:
    """
    Answers mentions and runs the broadcast.

    Example:
        responder = Responder(assembler, app.client)

        challenge = responder.dispatch(parse_event(body))
        await responder.broadcast("C123")
    """

    def __init__(self, assembler: ResponseAssembler, slack_client: AsyncWebClient):
        """
        Args:
            assembler: Builds the sections for a command
            slack_client: Async Slack Web API client used for posting
        """
        self.assembler = assembler
        self.slack_client = slack_client
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, event: InboundEvent) -> str | None:
        """
        Route a parsed inbound event.

        Must be called from a running event loop; mentions are answered
        in a task that outlives the call.

        Returns:
            The challenge to echo for UrlChallenge, otherwise None
        """
        match event:
            case UrlChallenge(challenge=challenge):
                logger.info("Answering URL verification challenge")
                return challenge
            case Mention():
                logger.info(
                    f"Mention in {event.channel}: {event.text[:50]}",
                    {"user": event.user, "event_id": event.event_id},
                )
                self._spawn(self.respond(event), name=f"mention-{event.event_id or event.ts}")
                return None
            case Unsupported(kind=kind):
                logger.debug(f"Ignoring unsupported event: {kind}")
                return None
        raise TypeError(f"Not an inbound event: {event!r}")

    def _spawn(self, coro: Coroutine, name: str) -> asyncio.Task:
        task = asyncio.create_task(self._guard(coro, name), name=name)
        # Keep a reference until done so the task is not garbage collected
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, coro: Coroutine, name: str) -> None:
        try:
            await coro
        except Exception as e:
            logger.error(f"Background task {name} failed", e)

    async def drain(self) -> None:
        """Wait for in-flight responses, used at shutdown."""
        if self._tasks:
            logger.info(f"Waiting for {len(self._tasks)} response(s) to finish")
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def respond(self, mention: Mention) -> list[MessageSection]:
        """Answer a mention in the channel it came from."""
        sections = await self.assembler.respond_to_text(mention.text)
        await self.post(mention.channel, sections)
        return sections

    async def broadcast(self, channel: str, day: str = TODAY) -> list[MessageSection]:
        """Post the configured locations' trucks to a channel."""
        logger.info(f"Broadcasting events for {day} to {channel}")
        sections = await self.assembler.find_events(day)
        await self.post(channel, sections)
        return sections

    async def post(self, channel: str, sections: Sequence[MessageSection]) -> int:
        """
        Post sections as one or more messages, in order.

        Stops at the first Slack error so later pages never appear
        without the earlier ones.

        Returns:
            Number of messages posted
        """
        posted = 0
        for message in paginate(sections):
            try:
                await self.slack_client.chat_postMessage(
                    channel=channel,
                    text=message.text,
                    blocks=message.blocks,
                )
            except SlackApiError as e:
                logger.error(
                    f"Error posting to {channel}",
                    e,
                    {"slack_error": e.response.get("error") if e.response is not None else None},
                )
                break
            posted += 1
        logger.debug(f"Posted {posted} message(s) to {channel}")
        return posted
