"""
Shared data models.
"""

from dataclasses import dataclass
from datetime import date, datetime

from birthday_bot.app.config import MAX_ITEMS


@dataclass(frozen=True)
class BirthdayRecord:
    person: str
    date: str  # ISO "YYYY-MM-DD"; the year is irrelevant, events recur yearly


@dataclass(frozen=True)
class EventQuery:
    """Options for listing calendar events."""

    time_min: datetime | None = None
    time_max: datetime | None = None
    max_items: int = MAX_ITEMS
    single_events: bool = False  # Expand recurring events into their instances


@dataclass(frozen=True)
class DateQuery:
    day: date


@dataclass(frozen=True)
class NameQuery:
    name: str


FindQuery = DateQuery | NameQuery


@dataclass(frozen=True)
class CommandRequest:
    """A slash command invocation decoded from the webhook body."""

    text: str
    response_url: str
    channel_id: str
    user_id: str
    command: str = "/birthdays"
