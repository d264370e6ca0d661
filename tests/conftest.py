"""Shared fixtures for the birthday bot tests"""

import base64
import time
from datetime import date, datetime
from typing import Any
from urllib.parse import urlencode

import pytest
from slack_sdk.signature import SignatureVerifier

from birthday_bot.app.config import config
from birthday_bot.services.calendar_service import CalendarClient

SIGNING_SECRET = "test-signing-secret"
RESPONSE_URL = "https://hooks.slack.com/commands/T000/123/abc"


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    """Provide a complete configuration and reload settings for every test"""
    monkeypatch.setenv("CALENDAR_ID", "birthdays@group.calendar.google.com")
    monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT_JSON", "{}")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T000/B000/xyz")
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-test")
    monkeypatch.setenv("GIPHY_API_KEY", "giphy-test")
    config.reset()
    yield
    config.reset()


class FakeRequest:
    def __init__(self, result: dict[str, Any]):
        self._result = result

    def execute(self) -> dict[str, Any]:
        return self._result


class FakeEvents:
    """
    Mimics the events() resource of the Calendar API.

    Listing with a time window and singleEvents returns this year's instances
    of the yearly events falling inside the window.
    """

    def __init__(self, items: list[dict[str, Any]]):
        self.items = items
        self.list_calls: list[dict[str, Any]] = []
        self.insert_calls: list[dict[str, Any]] = []

    def list(self, **params: Any) -> FakeRequest:
        self.list_calls.append(params)
        if "timeMin" not in params:
            return FakeRequest({"items": self.items[: params.get("maxResults", 250)]})

        day = datetime.fromisoformat(params["timeMin"]).date()
        instances = []
        for item in self.items:
            start = item.get("start", {}).get("date")
            if not start:
                continue
            original = date.fromisoformat(start)
            if (original.month, original.day) == (day.month, day.day):
                instances.append({**item, "start": {"date": day.isoformat()}})
        return FakeRequest({"items": instances})

    def insert(self, calendarId: str, body: dict[str, Any]) -> FakeRequest:
        self.insert_calls.append({"calendarId": calendarId, "body": body})
        return FakeRequest({"id": "evt-new", "htmlLink": "https://calendar/evt-new", **body})


class FakeCalendarService:
    def __init__(self, items: list[dict[str, Any]] | None = None):
        self._events = FakeEvents(items or [])

    def events(self) -> FakeEvents:
        return self._events


def birthday_event(person: str, start: str, event_id: str | None = None) -> dict[str, Any]:
    return {
        "id": event_id or person.lower(),
        "summary": person,
        "recurrence": ["RRULE:FREQ=YEARLY"],
        "start": {"date": start},
        "end": {"date": start},
    }


@pytest.fixture
def calendar_service():
    return FakeCalendarService([
        birthday_event("zoe", "1990-07-14"),
        birthday_event("Jakob", "1988-03-31"),
        birthday_event("Eve", "1992-12-25"),
        birthday_event("Adam", "1985-01-02"),
        birthday_event("Agent 25 December", "2000-06-01"),
    ])


@pytest.fixture
def calendar(calendar_service):
    return CalendarClient(calendar_service, "birthdays@group.calendar.google.com")


def signed_event(
    text: str,
    *,
    method: str = "POST",
    secret: str = SIGNING_SECRET,
    timestamp: int | None = None,
    extra_fields: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build an API Gateway event carrying a signed slash command"""
    fields = {
        "command": "/birthdays",
        "text": text,
        "response_url": RESPONSE_URL,
        "channel_id": "C123",
        "user_id": "U456",
        **(extra_fields or {}),
    }
    body = urlencode(fields)
    ts = str(timestamp or int(time.time()))
    signature = SignatureVerifier(secret).generate_signature(timestamp=ts, body=body)
    return {
        "body": base64.b64encode(body.encode("utf-8")).decode("ascii"),
        "isBase64Encoded": True,
        "headers": {
            "content-type": "application/x-www-form-urlencoded",
            "x-slack-request-timestamp": ts,
            "x-slack-signature": signature,
        },
        "requestContext": {"http": {"method": method, "path": "/slack/birthdays"}},
    }
