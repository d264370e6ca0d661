"""Tests for the slash command handler"""

import base64
import time
from datetime import date
from unittest.mock import Mock, patch

import pytest
from conftest import RESPONSE_URL, signed_event

from birthday_bot.app.errors import CalendarError, SlackError
from birthday_bot.app.main import process
from birthday_bot.slash_command_handler import lambda_handler

TODAY = date(2024, 6, 15)


@pytest.fixture
def slack():
    """Patch both Slack delivery channels"""
    with patch("birthday_bot.app.main.send_slack_message") as send, patch(
        "birthday_bot.app.main.send_ephemeral_slack_message"
    ) as ephemeral:
        yield send, ephemeral


def _run(event, calendar):
    return process(event, calendar_factory=lambda: calendar, today=TODAY)


def _posted_text(send):
    url, message = send.call_args.args
    assert url == RESPONSE_URL
    return message["blocks"][0]["text"]["text"]


def test_list(slack, calendar):
    send, ephemeral = slack
    response = _run(signed_event("list"), calendar)

    assert response["statusCode"] == 200
    assert _posted_text(send) == "Wow, *5* birthdays! Here they are:"
    ephemeral.assert_not_called()


def test_find_date(slack, calendar):
    send, _ = slack
    _run(signed_event("find 25 December"), calendar)
    assert "*Eve*" in _posted_text(send)
    assert "25 December" in _posted_text(send)


def test_add(slack, calendar, calendar_service):
    send, _ = slack
    _run(signed_event("add Alice on 5 May"), calendar)

    assert _posted_text(send) == "The birthday of Alice (5 May) was successfully added."
    assert calendar_service.events().insert_calls[0]["body"]["start"] == {"date": "2024-05-05"}


@pytest.mark.parametrize("text", ["", "help", "help me"])
def test_help(slack, calendar, text):
    send, _ = slack
    _run(signed_event(text), calendar)
    assert _posted_text(send).startswith("`/birthdays list`")


@pytest.mark.parametrize("text", ["hello", "List", "find", "addAlice on 5 May"])
def test_unrecognized_text_is_acknowledged(slack, calendar, text):
    """Prefixes are matched case-sensitively and need their trailing space"""
    send, _ = slack
    _run(signed_event(text), calendar)
    assert _posted_text(send) == "PONG"


@pytest.mark.parametrize("text", ["list", "help", "hello"])
def test_replies_are_posted_in_channel(slack, calendar, text):
    send, _ = slack
    _run(signed_event(text), calendar)

    url, message = send.call_args.args
    assert url == RESPONSE_URL
    assert message["response_type"] == "in_channel"


def test_in_channel_reply_reaches_webhook(calendar):
    with patch("birthday_bot.infrastructure.slack_manager.WebhookClient") as client, patch(
        "birthday_bot.app.main.send_ephemeral_slack_message"
    ) as ephemeral:
        client.return_value.send.return_value = Mock(status_code=200, body="ok")
        _run(signed_event("list"), calendar)

    client.assert_called_once_with(RESPONSE_URL)
    assert client.return_value.send.call_args.kwargs["response_type"] == "in_channel"
    ephemeral.assert_not_called()


def test_help_does_not_need_the_calendar(slack):
    send, _ = slack

    def no_calendar():
        raise AssertionError("calendar should not be built")

    process(signed_event("help"), calendar_factory=no_calendar)
    send.assert_called_once()


def test_command_failure_is_reported_privately(slack):
    send, ephemeral = slack

    def broken_calendar():
        raise CalendarError("Calendar list failed: boom")

    response = process(signed_event("list"), calendar_factory=broken_calendar)

    assert response["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_called_once_with(
        text="Calendar list failed: boom", channel="C123", user="U456"
    )


def test_delivery_failure_is_reported_privately(slack, calendar):
    send, ephemeral = slack
    send.side_effect = SlackError("Slack webhook error: 404 no_service")

    response = _run(signed_event("list"), calendar)

    assert response["statusCode"] == 200
    assert ephemeral.call_args.kwargs["text"] == "Slack webhook error: 404 no_service"


def test_ephemeral_failure_is_logged(slack, caplog):
    send, ephemeral = slack
    ephemeral.side_effect = SlackError("Slack API error: channel_not_found")

    def broken_calendar():
        raise CalendarError("boom")

    response = process(signed_event("list"), calendar_factory=broken_calendar)

    assert response["statusCode"] == 200
    assert "channel_not_found" in caplog.text


def test_rejects_non_post(slack, calendar):
    send, ephemeral = slack
    response = _run(signed_event("list", method="GET"), calendar)

    assert response["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_not_called()


def test_rejects_missing_body(slack, calendar):
    send, ephemeral = slack
    event = signed_event("list")
    del event["body"]

    assert _run(event, calendar)["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_not_called()


def test_rejects_invalid_base64_body(slack, calendar):
    send, ephemeral = slack
    event = signed_event("list")
    event["body"] = "not base64!!"

    assert _run(event, calendar)["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_not_called()


def test_accepts_plain_text_body(slack, calendar):
    send, ephemeral = slack
    event = signed_event("list")
    event["body"] = base64.b64decode(event["body"]).decode("utf-8")
    event["isBase64Encoded"] = False

    assert _run(event, calendar)["statusCode"] == 200
    assert _posted_text(send) == "Wow, *5* birthdays! Here they are:"
    ephemeral.assert_not_called()


def test_rejects_missing_response_url(slack, calendar):
    send, ephemeral = slack
    event = signed_event("list", extra_fields={"response_url": ""})

    assert _run(event, calendar)["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_not_called()


def test_rejects_bad_signature(slack, calendar, calendar_service):
    send, ephemeral = slack
    response = _run(signed_event("add Mallory on 1 April", secret="wrong"), calendar)

    assert response["statusCode"] == 200
    send.assert_not_called()
    ephemeral.assert_not_called()
    assert calendar_service.events().insert_calls == []


def test_rejects_stale_timestamp(slack, calendar):
    send, _ = slack
    _run(signed_event("list", timestamp=int(time.time()) - 3600), calendar)
    send.assert_not_called()


def test_rejects_tampered_body(slack, calendar):
    send, _ = slack
    event = signed_event("list")
    body = base64.b64decode(event["body"]).decode("utf-8").replace("list", "help")
    event["body"] = base64.b64encode(body.encode("utf-8")).decode("ascii")

    _run(event, calendar)
    send.assert_not_called()


def test_rejects_when_signing_secret_missing(slack, calendar, monkeypatch):
    from birthday_bot.app.config import config

    send, _ = slack
    monkeypatch.delenv("SLACK_SIGNING_SECRET")
    config.reset()

    assert _run(signed_event("list"), calendar)["statusCode"] == 200
    send.assert_not_called()


def test_lambda_handler(slack):
    send, _ = slack
    response = lambda_handler(signed_event("help"), None)

    assert response["statusCode"] == 200
    send.assert_called_once()
