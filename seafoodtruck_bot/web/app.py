"""
Webhook Application
===================

HTTP transport for the Slack Events API.

Routes:
- POST /  and  POST /slack/events   Events API webhook
- GET  /                            version info
- GET  /events?id=<location>&day=   raw events for one location, for debugging

The webhook acknowledges every well-formed envelope with 200 straight
away; mentions are answered afterwards by the Responder's background
task. Request signatures are not checked.
"""

from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response

from seafoodtruck_bot import __version__
from seafoodtruck_bot.errors import LookupFailedError, MissingArgumentError
from seafoodtruck_bot.foodtruck.client import FoodTruckClient
from seafoodtruck_bot.foodtruck.days import normalize_day
from seafoodtruck_bot.slack.events import parse_event
from seafoodtruck_bot.slack.responder import Responder
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Webhook")


def create_web_app(responder: Responder, client: FoodTruckClient) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        responder: Handles parsed Slack events
        client: Food truck API client for the debug endpoint

    Returns:
        The application, ready for uvicorn
    """
    app = FastAPI(title="seafoodtruck-bot", version=__version__)

    async def slack_events(request: Request) -> Response:
        try:
            payload = await request.json()
        except ValueError:
            logger.error("Error parsing Slack event payload")
            raise HTTPException(status_code=400, detail="Error reading payload from request")

        challenge = responder.dispatch(parse_event(payload))
        if challenge is not None:
            return PlainTextResponse(challenge)
        return Response(status_code=200)

    app.add_api_route("/", slack_events, methods=["POST"])
    app.add_api_route("/slack/events", slack_events, methods=["POST"])

    @app.get("/")
    async def version() -> dict:
        return {"version": __version__}

    @app.get("/events")
    async def events(id: str = "", day: str = "") -> list[dict]:
        try:
            found = await client.get_events(id, normalize_day(day or None))
        except MissingArgumentError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except LookupFailedError as e:
            logger.error(f"Error getting events for {id}", e)
            raise HTTPException(status_code=500, detail="Error getting events")
        return [asdict(event) for event in found]

    return app
