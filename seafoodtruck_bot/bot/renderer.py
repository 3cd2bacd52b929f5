"""
Message Renderer
================

Maps sections onto Slack Block Kit blocks. No decisions are made here:
one section becomes one block, in the same order.

    TextSection  -> {"type": "section", "text": {"type": "mrkdwn", ...}}
    ImageSection -> the same, plus an image "accessory"
    Divider      -> {"type": "divider"}

Slack rejects messages with more than 50 blocks, so long answers are
split into several consecutive messages.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from seafoodtruck_bot.bot.sections import Divider, ImageSection, MessageSection, TextSection

MAX_BLOCKS_PER_MESSAGE = 50
FALLBACK_TEXT_LIMIT = 3000


@dataclass(frozen=True)
class RenderedMessage:
    """
    One chat.postMessage payload.

    Attributes:
        text: Plain fallback text for notifications
        blocks: Block Kit blocks
    """
    text: str
    blocks: list[dict]


def _markdown(text: str) -> dict:
    return {"type": "mrkdwn", "text": text}


def render_section(section: MessageSection) -> dict:
    """Convert a single section into a block."""
    match section:
        case ImageSection(text=text, image_url=url, alt_text=alt):
            return {
                "type": "section",
                "text": _markdown(text),
                "accessory": {"type": "image", "image_url": url, "alt_text": alt},
            }
        case TextSection(text=text):
            return {"type": "section", "text": _markdown(text)}
        case Divider():
            return {"type": "divider"}
    raise TypeError(f"Not a message section: {section!r}")


def render(sections: Iterable[MessageSection]) -> list[dict]:
    """Convert sections into blocks, preserving order."""
    return [render_section(section) for section in sections]


def fallback_text(sections: Sequence[MessageSection]) -> str:
    """The text of the first non-divider section, for notifications."""
    for section in sections:
        if not isinstance(section, Divider):
            return section.text[:FALLBACK_TEXT_LIMIT]
    return ""


def paginate(
    sections: Sequence[MessageSection],
    limit: int = MAX_BLOCKS_PER_MESSAGE
) -> list[RenderedMessage]:
    """
    Split sections into messages of at most `limit` blocks.

    A divider that would start a new message is dropped, since the
    message boundary already separates the two parts.

    Args:
        sections: Sections in display order
        limit: Maximum blocks per message

    Returns:
        Messages in posting order
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")

    pages: list[list[MessageSection]] = []
    current: list[MessageSection] = []
    for section in sections:
        if len(current) == limit:
            pages.append(current)
            current = []
        if not current and isinstance(section, Divider) and pages:
            continue
        current.append(section)
    if current:
        pages.append(current)

    return [
        RenderedMessage(text=fallback_text(page), blocks=render(page))
        for page in pages
    ]
