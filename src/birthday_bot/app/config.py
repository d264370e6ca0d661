from dataclasses import dataclass

from birthday_bot.app.errors import ConfigurationError
from birthday_bot.infrastructure.platform_manager import get_parameters

# Constants that don't change
TIMEZONE = "Europe/Paris"
MAX_ITEMS = 250  # Max number of items in a page returned by events.list
GIPHY_TAG = "birthday"
GOOGLE_SCOPES = ["https://www.googleapis.com/auth/calendar.events"]


@dataclass
class AppSettings:
    """Birthday bot settings loaded from the environment."""

    # Google settings
    calendar_id: str | None
    google_service_account_json: str | None

    # Slack settings
    slack_webhook_url: str | None
    slack_signing_secret: str | None
    slack_bot_token: str | None

    # Giphy settings
    giphy_api_key: str | None

    log_level: str = "INFO"

    def require(self, *fields: str) -> None:
        """Raise ConfigurationError if any of the named fields has no value."""
        for field in fields:
            if not getattr(self, field):
                raise ConfigurationError(f"Configuration value is invalid: {field.upper()}")


class Config:
    """Singleton configuration manager for the birthday bot."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> AppSettings:
        """Get settings, loading from the environment if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Forget the cached settings so the next access reloads them."""
        self._settings = None

    def _load_settings(self) -> AppSettings:
        """Load settings from the environment."""
        parameters = get_parameters([
            "calendar_id",
            "google_service_account_json",
            "slack_webhook_url",
            "slack_signing_secret",
            "slack_bot_token",
            "giphy_api_key",
            "log_level",
        ])

        return AppSettings(
            calendar_id=parameters["calendar_id"],
            google_service_account_json=parameters["google_service_account_json"],
            slack_webhook_url=parameters["slack_webhook_url"],
            slack_signing_secret=parameters["slack_signing_secret"],
            slack_bot_token=parameters["slack_bot_token"],
            giphy_api_key=parameters["giphy_api_key"],
            log_level=(parameters["log_level"] or "INFO").upper(),
        )


# Create singleton instance
config = Config()


# Convenience functions
def get_settings() -> AppSettings:
    """Get settings from the singleton config."""
    return config.get_settings()
