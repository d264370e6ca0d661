from collections.abc import Mapping

from slack_sdk.signature import SignatureVerifier

from birthday_bot.app.config import get_settings
from birthday_bot.app.errors import SignatureVerificationError


def verify_slack_signature(body_raw: str | bytes, headers: Mapping[str, str]) -> bool:
    """Verify the Slack signature."""
    settings = get_settings()
    settings.require("slack_signing_secret")
    assert settings.slack_signing_secret is not None

    # Ensure body_raw is in bytes for Slack signature verification
    if isinstance(body_raw, str):
        body_raw = body_raw.encode("utf-8")

    # Verify Slack request (use the raw body passed by Slack, not the parsed form)
    verifier = SignatureVerifier(settings.slack_signing_secret)
    return verifier.is_valid_request(body_raw, dict(headers))


def require_slack_signature(body_raw: str | bytes, headers: Mapping[str, str]) -> None:
    """Raise SignatureVerificationError unless the request was signed by Slack."""
    if not verify_slack_signature(body_raw, headers):
        timestamp = _header(headers, "x-slack-request-timestamp")
        raise SignatureVerificationError(f"Invalid Slack signature (timestamp: {timestamp})")


def _header(headers: Mapping[str, str], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""
