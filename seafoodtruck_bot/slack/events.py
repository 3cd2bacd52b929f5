"""
Inbound Slack Events
====================

Slack Events API envelopes, reduced to the three cases the bot cares about:

- UrlChallenge: Slack verifying the webhook URL; echo the challenge back
- Mention:      someone @-mentioned the bot in a channel
- Unsupported:  anything else; acknowledged and ignored

Envelope shapes:
    {"type": "url_verification", "challenge": "abc"}
    {"type": "event_callback", "event": {"type": "app_mention", "channel": "C1",
                                          "text": "<@U0BOT> help", ...}}
"""

import re
from dataclasses import dataclass
from typing import Any

# Mentions look like <@U123ABC> or <@U123ABC|name>
MENTION_PATTERN = re.compile(r"<@[A-Z0-9]+(?:\|[^>]*)?>")


@dataclass(frozen=True)
class UrlChallenge:
    challenge: str


@dataclass(frozen=True)
class Mention:
    """
    An app_mention event.

    Attributes:
        channel: Channel the mention was posted in
        text: Message text with every user mention removed
        user: Who mentioned the bot
        ts: Message timestamp
        event_id: Envelope event id, useful for spotting re-deliveries
    """
    channel: str
    text: str
    user: str | None = None
    ts: str | None = None
    event_id: str | None = None


@dataclass(frozen=True)
class Unsupported:
    kind: str


InboundEvent = UrlChallenge | Mention | Unsupported


def strip_mentions(text: str) -> str:
    """Remove <@U...> mentions and surrounding whitespace."""
    return MENTION_PATTERN.sub("", text or "").strip()


def parse_event(payload: Any) -> InboundEvent:
    """
    Classify an Events API envelope.

    Args:
        payload: Decoded JSON body of the request

    Returns:
        UrlChallenge, Mention or Unsupported
    """
    if not isinstance(payload, dict):
        return Unsupported(kind=type(payload).__name__)

    envelope_type = payload.get("type") or ""

    if envelope_type == "url_verification":
        challenge = payload.get("challenge")
        if isinstance(challenge, str):
            return UrlChallenge(challenge=challenge)
        return Unsupported(kind=envelope_type)

    if envelope_type != "event_callback":
        return Unsupported(kind=envelope_type or "unknown")

    event = payload.get("event")
    if not isinstance(event, dict):
        return Unsupported(kind=envelope_type)

    event_type = event.get("type") or "unknown"
    channel = event.get("channel")
    if event_type != "app_mention" or not channel:
        return Unsupported(kind=event_type)

    return Mention(
        channel=channel,
        text=strip_mentions(event.get("text", "")),
        user=event.get("user"),
        ts=event.get("ts"),
        event_id=payload.get("event_id"),
    )
