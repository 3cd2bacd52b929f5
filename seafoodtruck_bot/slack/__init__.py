"""
Slack Integration
=================

- events:    Events API envelopes -> UrlChallenge | Mention | Unsupported
- responder: answers mentions and posts the broadcast
- app:       Bolt app and Socket Mode handler
- handlers:  Bolt listener registration
"""

from seafoodtruck_bot.slack.events import Mention, UrlChallenge, Unsupported, parse_event
from seafoodtruck_bot.slack.responder import Responder

__all__ = ["Mention", "UrlChallenge", "Unsupported", "parse_event", "Responder"]
