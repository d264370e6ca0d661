from collections.abc import Callable
from datetime import date
from typing import Any

from birthday_bot.app.commands import handle_add, handle_find, handle_help, handle_list
from birthday_bot.app.config import get_settings
from birthday_bot.app.errors import RequestRejectedError
from birthday_bot.app.process_event import decode_body, get_method, parse_command_request
from birthday_bot.auth.slack_auth import require_slack_signature
from birthday_bot.infrastructure.data_models import CommandRequest
from birthday_bot.infrastructure.platform_manager import create_logger
from birthday_bot.infrastructure.slack_manager import (
    send_ephemeral_slack_message,
    send_slack_message,
)
from birthday_bot.services.calendar_service import CalendarClient, build_calendar_client
from birthday_bot.services.renderer_service import render_pong

logger = create_logger(
    logger_name="birthday-bot.slash-command", log_level=get_settings().log_level
)


def create_response(status_code: int, body: str = "") -> dict[str, Any]:
    """
    Create a standard HTTP response.
    """
    return {
        "statusCode": status_code,
        "body": body,
        "headers": {"Content-Type": "text/plain"},
        "isBase64Encoded": False,
    }


def route_command(
    request: CommandRequest,
    calendar_factory: Callable[[], CalendarClient] = build_calendar_client,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Run the sub-command named by the request text and return its message.

    Prefixes are matched case-sensitively in a fixed order; the first match wins.
    """
    text = request.text

    if text.startswith("list"):
        logger.info("Listing birthdays")
        return handle_list(calendar_factory())

    if text.startswith("find "):
        logger.info(f"Finding birthdays for '{text[5:]}'")
        return handle_find(calendar_factory(), text[5:], today)

    if text.startswith("add "):
        logger.info(f"Adding birthday from '{text[4:]}'")
        return handle_add(calendar_factory(), text[4:], today)

    if text.startswith("help") or not text:
        return handle_help(request.command)

    logger.debug(f"Unrecognized command: '{text}'")
    return render_pong()


def process(
    event: dict[str, Any],
    calendar_factory: Callable[[], CalendarClient] = build_calendar_client,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Process a slash command event from API Gateway.

    Slack always gets a 200: results are delivered to the request's response_url and
    failures are reported privately to the requesting user.
    """
    logger.info("Slash command handler called")

    # 1. Validate and verify the request before running any command logic
    try:
        if get_method(event) != "POST":
            raise RequestRejectedError("Method not allowed")
        body_raw = decode_body(event)
        require_slack_signature(body_raw, event.get("headers") or {})
        request = parse_command_request(body_raw)
    except Exception as e:
        # Return 200 to acknowledge receipt, but log the error
        # This prevents Slack from retrying the request
        logger.error(f"Request rejected: {e}")
        return create_response(200)
    logger.info("Slack signature verified")

    # 2. Run the command and post the result
    try:
        message = route_command(request, calendar_factory, today)
        # Command results are public; only errors stay private
        send_slack_message(request.response_url, {**message, "response_type": "in_channel"})
    except Exception as e:
        logger.error(f"Error in slash command handler: {e}")
        # Don't return technical error messages to the channel, tell the user privately
        try:
            send_ephemeral_slack_message(
                text=str(e), channel=request.channel_id, user=request.user_id
            )
        except Exception as ee:
            logger.error(f"Could not send the ephemeral error message: {ee}")

    return create_response(200)
