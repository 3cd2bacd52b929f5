"""
Message Sections
================

The assembler answers with an ordered list of sections; the renderer
turns them into Slack blocks. A section is one of:

- TextSection:  markdown text
- ImageSection: markdown text with an image shown beside it
- Divider:      a horizontal rule
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextSection:
    text: str


@dataclass(frozen=True)
class ImageSection:
    text: str
    image_url: str
    alt_text: str


@dataclass(frozen=True)
class Divider:
    pass


MessageSection = TextSection | ImageSection | Divider
