"""Tests for seafoodtruck_bot.web.app."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from seafoodtruck_bot import __version__
from seafoodtruck_bot.bot.assembler import ResponseAssembler
from seafoodtruck_bot.errors import TransportError
from seafoodtruck_bot.slack.events import Mention
from seafoodtruck_bot.slack.responder import Responder
from seafoodtruck_bot.web.app import create_web_app

from conftest import make_event, make_truck


@pytest.fixture
def responder():
    mock = MagicMock(spec=Responder)
    mock.dispatch.return_value = None
    return mock


@pytest.fixture
def web(responder, food_client):
    return TestClient(create_web_app(responder, food_client))


MENTION_BODY = {
    "type": "event_callback",
    "event_id": "Ev1",
    "event": {"type": "app_mention", "channel": "C1", "user": "U1", "text": "<@U0BOT> help"},
}


class TestWebhook:
    @pytest.mark.parametrize("path", ["/", "/slack/events"])
    def test_mention_is_acknowledged(self, web, responder, path):
        response = web.post(path, json=MENTION_BODY)

        assert response.status_code == 200
        responder.dispatch.assert_called_once_with(
            Mention(channel="C1", text="help", user="U1", event_id="Ev1")
        )

    def test_url_verification_echoes_challenge(self, food_client):
        real = Responder(ResponseAssembler(food_client), AsyncMock())
        web = TestClient(create_web_app(real, food_client))

        response = web.post("/", json={"type": "url_verification", "challenge": "3eZbrw1aBm2rZgRNFdxV2595E9CY3gmdALWMmHkvFXO7tYXAYM8P"})

        assert response.status_code == 200
        assert response.text == "3eZbrw1aBm2rZgRNFdxV2595E9CY3gmdALWMmHkvFXO7tYXAYM8P"
        assert response.headers["content-type"].startswith("text/plain")

    def test_other_events_are_acknowledged(self, web):
        response = web.post("/", json={"type": "event_callback", "event": {"type": "reaction_added"}})
        assert response.status_code == 200

    def test_bad_json(self, web, responder):
        response = web.post("/", content=b"{not json", headers={"content-type": "application/json"})

        assert response.status_code == 400
        responder.dispatch.assert_not_called()


class TestVersion:
    def test_version(self, web):
        response = web.get("/")
        assert response.json() == {"version": __version__}


class TestEventsEndpoint:
    def test_lists_events(self, web, food_client):
        food_client.get_events.return_value = [make_event("9", trucks=(make_truck(),))]

        response = web.get("/events", params={"id": "123", "day": "tomorrow"})

        assert response.status_code == 200
        [event] = response.json()
        assert event["id"] == "9"
        assert event["bookings"][0]["truck"]["name"] == "Marination"
        food_client.get_events.assert_awaited_once_with("123", "tomorrow")

    def test_day_defaults_to_today(self, web, food_client):
        web.get("/events", params={"id": "123"})
        food_client.get_events.assert_awaited_once_with("123", "today")

    def test_lookup_failure(self, web, food_client):
        food_client.get_events.side_effect = TransportError("boom")

        response = web.get("/events", params={"id": "123"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Error getting events"}
