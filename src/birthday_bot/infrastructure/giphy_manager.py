import requests

from birthday_bot.app.config import GIPHY_TAG, get_settings
from birthday_bot.app.errors import GifLookupError

GIPHY_RANDOM_URL = "https://api.giphy.com/v1/gifs/random"
_TIMEOUT = 10.0


def random_gif_url(tag: str = GIPHY_TAG, rating: str = "g") -> str:
    """
    Fetch the URL of a random GIF for `tag` from Giphy.

    Raises:
        GifLookupError: If the request fails or the payload carries no image URL.
    """
    settings = get_settings()
    settings.require("giphy_api_key")

    params = {"api_key": settings.giphy_api_key, "tag": tag, "rating": rating}
    try:
        resp = requests.get(GIPHY_RANDOM_URL, params=params, timeout=_TIMEOUT)
        resp.raise_for_status()
        data = resp.json().get("data") or {}
    except (requests.RequestException, ValueError) as e:
        raise GifLookupError(f"Giphy request failed: {e}") from e

    url = data.get("images", {}).get("original", {}).get("url") or data.get("image_url")
    if not url:
        raise GifLookupError(f"Giphy returned no image for tag '{tag}'")
    return str(url)
