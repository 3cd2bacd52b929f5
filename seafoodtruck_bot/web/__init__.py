"""
HTTP Webhook
============

FastAPI app receiving Slack Events API callbacks.
"""

from seafoodtruck_bot.web.app import create_web_app

__all__ = ["create_web_app"]
