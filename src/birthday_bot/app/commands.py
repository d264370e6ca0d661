from datetime import date
from typing import Any

from birthday_bot.app.config import get_settings
from birthday_bot.app.errors import BirthdayParseError
from birthday_bot.infrastructure.data_models import DateQuery
from birthday_bot.infrastructure.platform_manager import create_logger
from birthday_bot.services.calendar_service import (
    CalendarClient,
    format_birthdays,
    pretty_date,
    sort_by_person,
)
from birthday_bot.services.parser import parse_add_command, parse_find_query
from birthday_bot.services.renderer_service import divider, render_help, render_message, section

logger = create_logger(logger_name="birthday-bot.commands", log_level=get_settings().log_level)


def handle_list(calendar: CalendarClient) -> dict[str, Any]:
    """All birthdays on record, sorted by name."""
    birthdays = sort_by_person(calendar.list_birthdays())
    return render_message(
        section(f"Wow, *{len(birthdays)}* birthdays! Here they are:"),
        divider(),
        section(format_birthdays(birthdays)),
    )


def handle_find(calendar: CalendarClient, text: str, today: date | None = None) -> dict[str, Any]:
    """Find birthdays by date ('25 December', '25 Dec') or, failing that, by name."""
    query = parse_find_query(text, today)

    if isinstance(query, DateQuery):
        day = f"{query.day.day} {query.day:%B}"
        names = [b.person for b in calendar.find_by_date(query.day)]
        if names:
            verb = "has" if len(names) == 1 else "have"
            return render_message(
                section(
                    f"Yay, *{' and '.join(names)}* {verb} their birthday on {day}! Congrats! 🎉"
                )
            )
        return render_message(
            section(
                f"Unfortunately, nobody we know will celebrate their birthday on {day}. "
                ":cry: Want to try another date? 📅"
            )
        )

    birthdays = calendar.find_by_name(query.name)
    if birthdays:
        plural = "s" if len(birthdays) > 1 else ""
        return render_message(
            section(f"Wow, *{len(birthdays)}* birthday{plural} found for your search! 🔎"),
            divider(),
            section(format_birthdays(birthdays)),
        )
    return render_message(
        section(
            f"Unfortunately, no birthday for '{query.name}' was found! :cry: "
            "Check the name maybe? 🤔"
        )
    )


def handle_add(calendar: CalendarClient, text: str, today: date | None = None) -> dict[str, Any]:
    """Add a birthday from '<name> on <day> <Month> [<year>]'."""
    try:
        birthday = parse_add_command(text, today)
    except BirthdayParseError as e:
        logger.info(f"Could not parse '{text}': {e}")
        return render_message(
            section(
                "Argh, I didn't get that! 🤷 Please use the syntax '[Name] on [Date]'. "
                "Thanks! 🙏 "
                f"(For what it's worth, here is the original error message: `{e}`)"
            )
        )

    calendar.add_birthday(birthday)
    return render_message(
        section(
            f"The birthday of {birthday.person} ({pretty_date(birthday.date)}) "
            "was successfully added."
        )
    )


def handle_help(command: str = "/birthdays") -> dict[str, Any]:
    return render_help(command)
