"""
Error Types
===========

Everything that can go wrong while answering a mention:

- EmptyInputError:      the mention carried no text once the bot token was removed
- MissingArgumentError: a required argument (location, configured locations) is absent
- NotFoundError:        the food truck API has no such location/neighborhood/truck
- TransportError:       the food truck API could not be reached or answered garbage

NotFoundError and TransportError look the same to a chat user ("having
trouble"); they are kept apart so the logs say which one happened.
"""


class BotError(Exception):
    """Base class for all errors raised by the bot."""


class ConfigError(BotError, ValueError):
    """Required configuration is missing or invalid."""


class EmptyInputError(BotError):
    """The mention text was empty after stripping the bot mention."""

    def __init__(self, message: str = "Message is empty, nothing to do"):
        super().__init__(message)


class MissingArgumentError(BotError):
    """A command was issued without an argument it cannot do without."""

    def __init__(self, argument: str, message: str | None = None):
        self.argument = argument
        super().__init__(message or f"Missing required argument: {argument}")


class LookupFailedError(BotError):
    """A food truck API lookup did not produce a usable result."""


class NotFoundError(LookupFailedError):
    """The requested resource does not exist."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id!r} not found")


class TransportError(LookupFailedError):
    """Network, HTTP or decoding failure talking to the food truck API."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
