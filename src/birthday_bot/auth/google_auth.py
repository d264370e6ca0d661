import json
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from birthday_bot.app.config import GOOGLE_SCOPES, get_settings
from birthday_bot.app.errors import ConfigurationError


def get_creds() -> service_account.Credentials:
    """Build service account credentials from the JSON key held in the environment."""
    settings = get_settings()
    settings.require("google_service_account_json")
    assert settings.google_service_account_json is not None

    try:
        info = json.loads(settings.google_service_account_json)
        return service_account.Credentials.from_service_account_info(info, scopes=GOOGLE_SCOPES)
    except ValueError as e:
        raise ConfigurationError(f"GOOGLE_SERVICE_ACCOUNT_JSON is not a valid key: {e}") from e


def calendar_service() -> Any:
    creds = get_creds()
    return build("calendar", "v3", credentials=creds, cache_discovery=False)
