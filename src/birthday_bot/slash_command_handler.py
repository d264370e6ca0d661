from typing import Any

from birthday_bot.app.main import process


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for the /birthdays slash command."""
    return process(event)
