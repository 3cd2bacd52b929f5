"""
Slack Bolt App
==============

Socket Mode transport, for running the bot without a public URL.

Socket Mode opens a WebSocket to Slack and receives the same Events API
envelopes the webhook would. Bolt acknowledges each envelope before the
listener runs, so the listener only has to hand the event over.

The default HTTP transport lives in seafoodtruck_bot.web.app.
"""

from slack_bolt.async_app import AsyncApp
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler

from seafoodtruck_bot.utils.config import SlackConfig
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("SlackApp")


def create_slack_app(config: SlackConfig) -> AsyncApp:
    """
    Create the Bolt app.

    Args:
        config: Slack tokens

    Returns:
        Configured AsyncApp instance
    """
    app = AsyncApp(
        token=config.bot_token,
        signing_secret=config.signing_secret,
    )

    logger.info("Slack Bolt app created")

    return app


def create_socket_handler(app: AsyncApp, config: SlackConfig) -> AsyncSocketModeHandler:
    """
    Create a Socket Mode handler for the app.

    Args:
        app: The Bolt app instance
        config: Slack tokens, app_token must be set

    Returns:
        Handler ready for connect_async()
    """
    if not config.app_token:
        raise ValueError("Socket Mode needs SLACK_APP_TOKEN")

    handler = AsyncSocketModeHandler(
        app=app,
        app_token=config.app_token
    )

    logger.info("Socket Mode handler created")

    return handler
