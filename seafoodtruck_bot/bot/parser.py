"""
Command Parser
==============

Turns mention text into a Command.

Grammar (words are whitespace separated):

    mention    := command_words (connective argument)*
    connective := "at" | "in" | "for"      (any case)
    argument   := slug [day]               after "at" / "in"
                | day                      after "for"
    day        := "today" | "tomorrow"     (exact, lower case)

Examples:
    "help"                                      -> help
    "find events for tomorrow"                  -> find events, day=tomorrow
    "find trucks at westlake-park"              -> find trucks, location=westlake-park
    "find trucks at westlake in downtown today" -> ... neighborhood=downtown, day=today

Rules for odd input:
- No connective: the whole trimmed text is the command, no arguments.
- A connective with nothing after it leaves that argument unset.
- The same connective twice: the first one wins.
- A day slot holding anything but "today"/"tomorrow" is treated as
  absent, so the command falls back to today.
- Words the grammar has no slot for are kept in Command.extra and
  otherwise ignored.
"""

import re
from dataclasses import dataclass

from seafoodtruck_bot.errors import EmptyInputError
from seafoodtruck_bot.foodtruck.days import is_day_token, normalize_day

CONNECTIVE_AT = "at"
CONNECTIVE_IN = "in"
CONNECTIVE_FOR = "for"
CONNECTIVES = (CONNECTIVE_AT, CONNECTIVE_IN, CONNECTIVE_FOR)

_WORD = re.compile(r"\S+")


def normalize_keyword(keyword: str) -> str:
    """Lower-case a command keyword and collapse its whitespace."""
    return " ".join(keyword.lower().split())


@dataclass(frozen=True)
class Command:
    """
    A parsed mention.

    Attributes:
        keyword: Command text before the first connective, trimmed but
            otherwise as typed
        location: Location slug given after "at"
        neighborhood: Neighborhood slug given after "in"
        day: "today"/"tomorrow" if one was given, else None
        extra: Words that did not fit any slot
    """
    keyword: str
    location: str | None = None
    neighborhood: str | None = None
    day: str | None = None
    extra: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """The keyword normalized for dispatch (e.g. "find trucks")."""
        return normalize_keyword(self.keyword)

    @property
    def args(self) -> tuple[str, ...]:
        """Arguments that were given, in grammar order."""
        return tuple(
            value for value in (self.location, self.neighborhood, self.day)
            if value is not None
        )

    @property
    def resolved_day(self) -> str:
        """The day to query, defaulting to today."""
        return normalize_day(self.day)


def _tokenize(text: str) -> list[re.Match]:
    return list(_WORD.finditer(text))


def _split_segments(tokens: list[re.Match], first: int) -> list[tuple[str, list[str]]]:
    """Group the tokens from `first` on into (connective, words) pairs."""
    segments: list[tuple[str, list[str]]] = []
    for token in tokens[first:]:
        word = token.group()
        if word.lower() in CONNECTIVES:
            segments.append((word.lower(), []))
        else:
            segments[-1][1].append(word)
    return segments


def parse(raw_text: str) -> Command:
    """
    Parse mention text (bot mention already removed) into a Command.

    Args:
        raw_text: The text of the mention

    Returns:
        The parsed Command

    Raises:
        EmptyInputError: If there is no text to parse
    """
    text = (raw_text or "").strip()
    if not text:
        raise EmptyInputError()

    tokens = _tokenize(text)
    first = next(
        (i for i, token in enumerate(tokens) if token.group().lower() in CONNECTIVES),
        None,
    )
    if first is None:
        return Command(keyword=text)

    keyword = text[:tokens[first].start()].strip()
    slots: dict[str, str | None] = {"location": None, "neighborhood": None, "day": None}
    seen: set[str] = set()
    extra: list[str] = []

    for connective, words in _split_segments(tokens, first):
        if connective in seen:
            extra.append(connective)
            extra.extend(words)
            continue
        seen.add(connective)

        if connective == CONNECTIVE_FOR:
            trailing = words
        else:
            slot = "location" if connective == CONNECTIVE_AT else "neighborhood"
            if not words:
                continue
            slots[slot] = words[0]
            trailing = words[1:]

        for word in trailing:
            if slots["day"] is None and is_day_token(word):
                slots["day"] = word
            else:
                extra.append(word)

    return Command(
        keyword=keyword,
        location=slots["location"],
        neighborhood=slots["neighborhood"],
        day=slots["day"],
        extra=tuple(extra),
    )
