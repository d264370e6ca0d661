"""
Errors raised by the birthday bot.

Adapters translate library exceptions into these types; the two top-level
`process()` functions are the only places that turn them into responses.
"""


class BirthdayBotError(Exception):
    """Base class for all birthday bot errors."""


class ConfigurationError(BirthdayBotError):
    """A required configuration value is missing."""


class RequestRejectedError(BirthdayBotError):
    """The inbound request failed a precondition and was not processed."""


class SignatureVerificationError(RequestRejectedError):
    """The inbound request is not signed by Slack."""


class BirthdayParseError(BirthdayBotError):
    """Free text could not be turned into a birthday."""


class CommandSyntaxError(BirthdayParseError):
    """The text does not follow the '<name> on <date>' grammar."""


class InvalidDateError(BirthdayParseError):
    """The text names a date that does not exist, e.g. 31 February."""


class CalendarError(BirthdayBotError):
    """The calendar provider call failed."""


class SlackError(BirthdayBotError):
    """A message could not be delivered to Slack."""


class GifLookupError(BirthdayBotError):
    """No GIF could be fetched."""
