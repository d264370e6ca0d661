import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from birthday_bot.app.config import TIMEZONE, get_settings
from birthday_bot.app.errors import CommandSyntaxError, InvalidDateError
from birthday_bot.infrastructure.data_models import BirthdayRecord, DateQuery, FindQuery, NameQuery
from birthday_bot.infrastructure.platform_manager import create_logger

logger = create_logger(logger_name="birthday-bot.parser", log_level=get_settings().log_level)

# Should match 'Name on Day Monthname YearMaybe', e.g. 'Jakob on 31 March 2021', 'Jakob on 31 Mar'
ADD_PATTERN = re.compile(r"(.+)\s+on\s+(\d\d?)\s+([A-Z][a-z]+)\s*(\d{4})?")

# Full month name first, then the abbreviated one
DATE_FORMATS = ("%d %B %Y", "%d %b %Y")


def today_in_timezone(tz: str = TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz)).date()


def parse_day_month(text: str) -> date | None:
    """
    Parse "<day> <month name> <year>" strictly, accepting full or abbreviated
    month names. Returns None if the text is not a real calendar date.
    """
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_find_query(text: str, today: date | None = None) -> FindQuery:
    """
    Decide whether a find query is a date or a name.

    The stricter date grammar ("25 December", "25 Dec") is tried first in the
    current year; any text that is not a real date is treated as a name.
    """
    today = today or today_in_timezone()
    query = text.strip()

    day = parse_day_month(f"{query} {today.year}") if query else None
    if day is not None:
        logger.debug(f"'{query}' parsed as the date {day.isoformat()}")
        return DateQuery(day=day)

    logger.debug(f"'{query}' is not a date, searching by name")
    return NameQuery(name=query)


def parse_add_command(text: str, today: date | None = None) -> BirthdayRecord:
    """
    Parse '<name> on <day> <Month> [<year>]' into a birthday record.

    Raises:
        CommandSyntaxError: If the text does not follow the grammar.
        InvalidDateError: If the day and month do not form a real date.
    """
    match = ADD_PATTERN.search(text)
    if not match:
        raise CommandSyntaxError('Wrong syntax, please use "Name" on "Date"')

    name, day, month, year = match.groups()
    # The year has no importance because of the yearly recurrence
    if not year:
        year = str((today or today_in_timezone()).year)

    birthday = parse_day_month(f"{day} {month} {year}")
    if birthday is None:
        raise InvalidDateError("Date is not valid")

    return BirthdayRecord(person=name.strip(), date=birthday.isoformat())
