from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from googleapiclient.errors import HttpError

from birthday_bot.app.config import TIMEZONE, get_settings
from birthday_bot.app.errors import CalendarError
from birthday_bot.auth.google_auth import calendar_service
from birthday_bot.infrastructure.data_models import BirthdayRecord, EventQuery
from birthday_bot.infrastructure.platform_manager import create_logger

logger = create_logger(logger_name="birthday-bot.calendar", log_level=get_settings().log_level)

EMOJIS = ["🎂", "🥳", "🍾", "🥂", "🎇", "🎉", "🎁"]


class CalendarClient:
    """
    Birthday operations on a single Google Calendar.

    Args:
        service: A Google Calendar v3 service resource (googleapiclient).
        calendar_id (str): The calendar holding one all-day recurring event per birthday.
        tz (str): IANA timezone used for day boundaries.
    """

    def __init__(self, service: Any, calendar_id: str, *, tz: str = TIMEZONE) -> None:
        self._service = service
        self._calendar_id = calendar_id
        self._tz = tz

    def list_birthdays(self, query: EventQuery | None = None) -> list[BirthdayRecord]:
        """List the birthdays matching the query, in the order the calendar returns them."""
        query = query or EventQuery()
        params: dict[str, Any] = {
            "calendarId": self._calendar_id,
            "maxResults": query.max_items,
        }
        if query.time_min is not None:
            params["timeMin"] = query.time_min.isoformat()
        if query.time_max is not None:
            params["timeMax"] = query.time_max.isoformat()
        if query.single_events:
            params["singleEvents"] = True
            params["orderBy"] = "startTime"

        try:
            response = self._service.events().list(**params).execute()
        except HttpError as e:
            raise CalendarError(f"Calendar list failed with status {e.resp.status}: {e}") from e
        except Exception as e:
            raise CalendarError(f"Calendar list failed: {e}") from e

        # Extract only the name and the date
        birthdays = []
        for item in response.get("items", []):
            start_date = item.get("start", {}).get("date")
            if not start_date:
                logger.warning(f"Skipping event without an all-day start: {item.get('id')}")
                continue
            birthdays.append(BirthdayRecord(person=item.get("summary", ""), date=start_date))
        return birthdays

    def find_by_date(self, day: date) -> list[BirthdayRecord]:
        """Return the birthdays falling on `day`."""
        time_min, time_max = day_bounds(day, self._tz)
        logger.info(f"Searching birthdays from {time_min.isoformat()} to {time_max.isoformat()}")
        return self.list_birthdays(
            EventQuery(time_min=time_min, time_max=time_max, single_events=True)
        )

    def find_by_name(self, name: str) -> list[BirthdayRecord]:
        """Return the birthdays whose name contains `name`, ignoring case."""
        needle = name.lower()
        return [b for b in self.list_birthdays() if needle in b.person.lower()]

    def add_birthday(self, birthday: BirthdayRecord) -> dict[str, Any]:
        """Create a yearly recurring all-day event for the birthday."""
        start = date.fromisoformat(birthday.date)
        event = {
            "summary": birthday.person,
            "recurrence": ["RRULE:FREQ=YEARLY"],
            "start": {"date": start.isoformat()},
            # All-day end dates are exclusive
            "end": {"date": (start + timedelta(days=1)).isoformat()},
        }

        try:
            created = (
                self._service.events().insert(calendarId=self._calendar_id, body=event).execute()
            )
        except HttpError as e:
            raise CalendarError(f"Calendar insert failed with status {e.resp.status}: {e}") from e
        except Exception as e:
            raise CalendarError(f"Calendar insert failed: {e}") from e

        logger.info(f"Added birthday of {birthday.person} on {birthday.date}")
        return {
            "event_id": created.get("id"),
            "html_link": created.get("htmlLink"),
            "person": created.get("summary"),
            "date": created.get("start", {}).get("date"),
        }


def build_calendar_client() -> CalendarClient:
    """Create a CalendarClient from the configured calendar and service account."""
    settings = get_settings()
    settings.require("calendar_id")
    assert settings.calendar_id is not None
    return CalendarClient(calendar_service(), settings.calendar_id)


def day_bounds(day: date, tz: str = TIMEZONE) -> tuple[datetime, datetime]:
    """Start and end of `day` in the given timezone."""
    zone = ZoneInfo(tz)
    return (
        datetime.combine(day, time.min, tzinfo=zone),
        datetime.combine(day, time.max, tzinfo=zone).replace(microsecond=0),
    )


def sort_by_person(birthdays: Iterable[BirthdayRecord]) -> list[BirthdayRecord]:
    return sorted(birthdays, key=lambda b: b.person.upper())


def pretty_date(iso_date: str) -> str:
    """'2021-03-31' -> '31 March'"""
    d = date.fromisoformat(iso_date)
    return f"{d.day} {d:%B}"


def format_birthdays(birthdays: Iterable[BirthdayRecord], rng: random.Random | None = None) -> str:
    """Format birthdays as '<emoji> <day month>: <name>' separated by ' · '."""
    choice = (rng or random).choice
    return " · ".join(f"{choice(EMOJIS)} {pretty_date(b.date)}: {b.person}" for b in birthdays)


def join_names(names: Sequence[str]) -> str:
    """
    Join names for an announcement: 'A', 'A and B', 'A, B, C'.

    Three or more names are comma separated without a final 'and'.
    """
    if len(names) == 2:
        return " and ".join(names)
    return ", ".join(names)
