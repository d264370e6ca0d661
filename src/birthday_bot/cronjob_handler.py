from typing import Any

from birthday_bot.app.cronjob import process


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for the scheduled birthday announcement."""
    return process()
