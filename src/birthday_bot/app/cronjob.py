from collections.abc import Callable
from datetime import date
from typing import Any

from birthday_bot.app.config import TIMEZONE, get_settings
from birthday_bot.infrastructure.giphy_manager import random_gif_url
from birthday_bot.infrastructure.platform_manager import create_logger
from birthday_bot.infrastructure.slack_manager import send_slack_message
from birthday_bot.services.calendar_service import (
    CalendarClient,
    build_calendar_client,
    join_names,
)
from birthday_bot.services.parser import today_in_timezone
from birthday_bot.services.renderer_service import render_announcement

logger = create_logger(logger_name="birthday-bot.cronjob", log_level=get_settings().log_level)


def process(
    calendar_factory: Callable[[], CalendarClient] = build_calendar_client,
    today: date | None = None,
) -> dict[str, Any]:
    """Announce today's birthdays to the configured Slack channel."""
    try:
        today = today or today_in_timezone(TIMEZONE)
        birthdays = calendar_factory().find_by_date(today)
        if not birthdays:
            logger.info(f"No birthdays found for {today.isoformat()}")
            return {}

        names = join_names([f"*{b.person}*" for b in birthdays])
        logger.info(f"Birthdays today ({today.isoformat()}): {names}")

        # Only fetch a GIF once someone has been found
        image_url = random_gif_url()

        settings = get_settings()
        settings.require("slack_webhook_url")
        assert settings.slack_webhook_url is not None
        send_slack_message(settings.slack_webhook_url, render_announcement(names, image_url))
        return {}
    except Exception as e:
        logger.error(f"Error in cronjob handler: {e}")
        return {"statusCode": 500, "body": str(e)}
