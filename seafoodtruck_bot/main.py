"""
SeaFoodTruck Bot - Main Entry Point
===================================

Startup order:
1. Load configuration and set the log level
2. Create the food truck API client and the response assembler
3. Create the Slack client and the responder
4. Start the weekday broadcast scheduler
5. Serve the chosen transport (HTTP webhook or Socket Mode)

Run with:
    python -m seafoodtruck_bot.main

Or after installing:
    seafoodtruck-bot
"""

import asyncio
import signal
import sys

import uvicorn
from slack_sdk.web.async_client import AsyncWebClient

from seafoodtruck_bot import __version__
from seafoodtruck_bot.bot.assembler import ResponseAssembler
from seafoodtruck_bot.errors import ConfigError
from seafoodtruck_bot.foodtruck.client import FoodTruckClient
from seafoodtruck_bot.scheduler import BroadcastScheduler
from seafoodtruck_bot.slack.responder import Responder
from seafoodtruck_bot.utils.config import Config, load_config
from seafoodtruck_bot.utils.logger import Logger, configure_logging, parse_level

main_logger = Logger("Main")


async def _serve_http(config: Config, responder: Responder, client: FoodTruckClient) -> None:
    """Run the FastAPI webhook under uvicorn until it is told to stop."""
    from seafoodtruck_bot.web.app import create_web_app

    app = create_web_app(responder, client)
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=parse_level(config.log_level).name.lower(),
    ))
    main_logger.info(f"Listening on {config.server.host}:{config.server.port}")
    # uvicorn installs its own SIGINT/SIGTERM handlers
    await server.serve()


async def _serve_socket(config: Config, responder: Responder) -> None:
    """Run the Bolt Socket Mode handler until SIGINT/SIGTERM."""
    from seafoodtruck_bot.slack.app import create_slack_app, create_socket_handler
    from seafoodtruck_bot.slack.handlers import register_handlers

    app = create_slack_app(config.slack)
    register_handlers(app, responder)
    handler = create_socket_handler(app, config.slack)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    main_logger.info("Starting Socket Mode connection...")
    await handler.connect_async()
    await stop.wait()
    await handler.close_async()


async def main() -> None:
    """
    Main async entry point.

    Initializes all components and runs the bot until shutdown.
    """
    try:
        config = load_config()
    except ConfigError as e:
        main_logger.error("Invalid configuration", e)
        sys.exit(1)

    configure_logging(config.log_level)
    main_logger.info(f"Starting SeaFoodTruck Bot {__version__} in {config.slack.mode} mode")

    client = FoodTruckClient(config.foodtruck)
    assembler = ResponseAssembler(client, config.broadcast.location_ids)
    slack_client = AsyncWebClient(token=config.slack.bot_token)
    responder = Responder(assembler, slack_client)

    scheduler = BroadcastScheduler(config, responder)
    scheduler.start()

    try:
        if config.slack.mode == "socket":
            await _serve_socket(config, responder)
        else:
            await _serve_http(config, responder, client)
    finally:
        await _shutdown(scheduler, responder, client)


async def _shutdown(
    scheduler: BroadcastScheduler,
    responder: Responder,
    client: FoodTruckClient
) -> None:
    """
    Graceful shutdown: stop scheduling, let in-flight answers finish,
    then close the HTTP pool.
    """
    main_logger.info("Shutting down...")

    scheduler.stop()
    await responder.drain()
    await client.aclose()

    main_logger.info("Shutdown complete")


def run():
    """
    Synchronous entry point.

    This is called when running with the `seafoodtruck-bot` command.
    """
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
