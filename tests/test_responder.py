"""Tests for seafoodtruck_bot.slack.responder."""

from unittest.mock import AsyncMock

import pytest
from slack_sdk.errors import SlackApiError

from seafoodtruck_bot.bot.assembler import ResponseAssembler
from seafoodtruck_bot.bot.sections import TextSection
from seafoodtruck_bot.slack.events import Mention, Unsupported, UrlChallenge
from seafoodtruck_bot.slack.responder import Responder

from conftest import make_event, make_truck


@pytest.fixture
def slack_client():
    client = AsyncMock()
    client.chat_postMessage.return_value = {"ok": True}
    return client


@pytest.fixture
def responder(food_client, slack_client):
    return Responder(ResponseAssembler(food_client, location_ids=["123"]), slack_client)


class TestDispatch:
    def test_challenge_is_returned(self, responder, slack_client):
        assert responder.dispatch(UrlChallenge("abc")) == "abc"
        slack_client.chat_postMessage.assert_not_called()

    def test_unsupported_is_ignored(self, responder, slack_client):
        assert responder.dispatch(Unsupported("message")) is None
        slack_client.chat_postMessage.assert_not_called()

    def test_rejects_unknown_objects(self, responder):
        with pytest.raises(TypeError):
            responder.dispatch("help")

    @pytest.mark.asyncio
    async def test_mention_is_answered_in_background(self, responder, slack_client):
        assert responder.dispatch(Mention(channel="C1", text="help", event_id="Ev1")) is None

        await responder.drain()

        slack_client.chat_postMessage.assert_awaited_once()
        kwargs = slack_client.chat_postMessage.await_args.kwargs
        assert kwargs["channel"] == "C1"
        assert "You can ask me" in kwargs["text"]
        assert kwargs["blocks"][0]["type"] == "section"

    @pytest.mark.asyncio
    async def test_background_failure_is_contained(self, responder, food_client):
        food_client.get_location.side_effect = RuntimeError("unexpected")

        responder.dispatch(Mention(channel="C1", text="find events"))
        await responder.drain()


class TestRespond:
    @pytest.mark.asyncio
    async def test_find_events_posts_blocks_in_order(self, responder, food_client, slack_client):
        food_client.get_events.return_value = [make_event(trucks=(make_truck("a", "A"), make_truck("b", "B")))]

        sections = await responder.respond(Mention(channel="C1", text="find events for tomorrow"))

        assert len(sections) == 3
        blocks = slack_client.chat_postMessage.await_args.kwargs["blocks"]
        assert len(blocks) == 3
        assert "truck(s)" in blocks[0]["text"]["text"]
        assert "accessory" in blocks[1] and "accessory" in blocks[2]


class TestBroadcast:
    @pytest.mark.asyncio
    async def test_broadcast_uses_today(self, responder, food_client, slack_client):
        await responder.broadcast("C9")

        food_client.get_events.assert_awaited_once_with("123", "today")
        assert slack_client.chat_postMessage.await_args.kwargs["channel"] == "C9"


class TestPost:
    @pytest.mark.asyncio
    async def test_long_answers_are_split(self, responder, slack_client):
        sections = [TextSection(str(i)) for i in range(60)]

        assert await responder.post("C1", sections) == 2

        first, second = slack_client.chat_postMessage.await_args_list
        assert len(first.kwargs["blocks"]) == 50
        assert len(second.kwargs["blocks"]) == 10

    @pytest.mark.asyncio
    async def test_slack_error_stops_posting(self, responder, slack_client):
        slack_client.chat_postMessage.side_effect = SlackApiError(
            "channel_not_found", {"ok": False, "error": "channel_not_found"}
        )

        posted = await responder.post("C1", [TextSection(str(i)) for i in range(60)])

        assert posted == 0
        assert slack_client.chat_postMessage.await_count == 1
