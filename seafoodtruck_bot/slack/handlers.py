"""
Slack Event Handlers
====================

Bolt listeners for Socket Mode. The listener does no work itself: it
classifies the envelope and passes it to the Responder, which answers
from a background task.
"""

from slack_bolt.async_app import AsyncApp

from seafoodtruck_bot.slack.events import parse_event
from seafoodtruck_bot.slack.responder import Responder
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Handlers")


def make_mention_listener(responder: Responder):
    """Build the app_mention listener bound to a responder."""

    async def handle_mention(body: dict) -> None:
        responder.dispatch(parse_event(body))

    return handle_mention


def register_handlers(app: AsyncApp, responder: Responder) -> None:
    """
    Register all event handlers with the Slack app.

    Args:
        app: The Bolt app instance
        responder: Answers the mentions
    """
    app.event("app_mention")(make_mention_listener(responder))

    logger.info("Registered Slack event handlers")
