from typing import Any

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from slack_sdk.webhook import WebhookClient

from birthday_bot.app.config import get_settings
from birthday_bot.app.errors import SlackError


def send_slack_message(url: str, message: dict[str, Any]) -> None:
    """
    Post a block message to a Slack webhook or slash command response URL.

    Args:
        url (str): Incoming webhook URL or the `response_url` of a slash command.
        message (dict): Payload with `blocks` and an optional fallback `text`.

    Raises:
        SlackError: If the URL is missing or Slack does not accept the message.
    """
    if not url:
        raise SlackError("Argument 'url' is not set. You must provide a URL to post to Slack.")

    try:
        response = WebhookClient(url).send(
            text=message.get("text"),
            blocks=message.get("blocks"),
            response_type=message.get("response_type"),
        )
    except Exception as e:
        raise SlackError(f"Exception while posting to Slack: {e}") from e

    if response.status_code != 200:
        raise SlackError(f"Slack webhook error: {response.status_code} {response.body}")


def send_ephemeral_slack_message(*, text: str, channel: str, user: str) -> dict[str, Any]:
    """Post a message only `user` can see in `channel`, using the bot token."""
    if not channel or not user:
        raise SlackError("Arguments 'channel' and 'user' are required for an ephemeral message.")

    settings = get_settings()
    settings.require("slack_bot_token")
    client = WebClient(token=settings.slack_bot_token)

    try:
        response = client.chat_postEphemeral(channel=channel, user=user, text=text)
    except SlackApiError as e:
        error = e.response.get("error", str(e)) if e.response else str(e)
        raise SlackError(f"Slack API error: {error}") from e

    return {"ok": True, "message_ts": response.get("message_ts")}
