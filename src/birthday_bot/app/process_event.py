import base64
import binascii
from typing import Any
from urllib.parse import parse_qs

from birthday_bot.app.errors import RequestRejectedError
from birthday_bot.infrastructure.data_models import CommandRequest


def get_method(event: dict[str, Any]) -> str:
    """HTTP method of an API Gateway (payload v2) event."""
    return str(event.get("requestContext", {}).get("http", {}).get("method", "")).upper()


def decode_body(event: dict[str, Any]) -> str:
    """
    Return the raw request body as text.

    API Gateway sends form posts base64 encoded; the decoded text is what Slack signed.
    """
    body = event.get("body")
    if not body:
        raise RequestRejectedError("No POST body received.")

    if isinstance(body, bytes):
        body = body.decode("utf-8")
    if not event.get("isBase64Encoded", True):
        return str(body)

    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise RequestRejectedError(f"Body is not valid base64: {e}") from e


def parse_command_request(body_raw: str) -> CommandRequest:
    """Build a CommandRequest from the form-urlencoded slash command body."""
    form = {k: v[0] for k, v in parse_qs(body_raw, keep_blank_values=True).items()}

    response_url = form.get("response_url", "")
    if not response_url:
        raise RequestRejectedError("No response_url provided in the Slack request")

    return CommandRequest(
        text=form.get("text", "").strip(),
        response_url=response_url,
        channel_id=form.get("channel_id", ""),
        user_id=form.get("user_id", ""),
        command=form.get("command") or "/birthdays",
    )
