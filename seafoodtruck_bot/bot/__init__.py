"""
Bot Core
========

Mention text in, Slack blocks out:
- parser:    text -> Command
- assembler: Command -> sections (calls the food truck API)
- renderer:  sections -> Block Kit messages
"""

from seafoodtruck_bot.bot.assembler import ResponseAssembler
from seafoodtruck_bot.bot.parser import Command, parse
from seafoodtruck_bot.bot.renderer import RenderedMessage, paginate, render
from seafoodtruck_bot.bot.sections import Divider, ImageSection, MessageSection, TextSection

__all__ = [
    "ResponseAssembler",
    "Command",
    "parse",
    "RenderedMessage",
    "paginate",
    "render",
    "Divider",
    "ImageSection",
    "MessageSection",
    "TextSection",
]
