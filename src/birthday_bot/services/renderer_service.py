"""
Builders for Slack block messages.

Every message carries a plain `text` fallback next to its blocks, used by Slack
for notifications.
"""

from typing import Any

Block = dict[str, Any]


def section(text: str, text_type: str = "mrkdwn") -> Block:
    return {"type": "section", "text": {"type": text_type, "text": text}}


def divider() -> Block:
    return {"type": "divider"}


def image(image_url: str, alt_text: str, title: str | None = None) -> Block:
    block: Block = {"type": "image", "image_url": image_url, "alt_text": alt_text}
    if title:
        block["title"] = {"type": "plain_text", "text": title}
    return block


def render_message(*blocks: Block, fallback: str | None = None) -> dict[str, Any]:
    """Wrap blocks into a message payload."""
    if fallback is None:
        fallback = next(
            (b["text"]["text"] for b in blocks if b.get("type") == "section"), ""
        )
    return {"blocks": list(blocks), "text": fallback}


def render_announcement(names: str, image_url: str) -> dict[str, Any]:
    return render_message(
        section(f"Happy birthday, {names}! 🥳. Have a great day and lots of 🎂."),
        image(
            image_url,
            alt_text="Birthday GIF",
            title="If you know them, let them know you know! 😉",
        ),
    )


def render_pong() -> dict[str, Any]:
    # Just acknowledging the request
    return render_message(section("PONG", text_type="plain_text"))


def render_help(command: str = "/birthdays") -> dict[str, Any]:
    return render_message(
        section(f"`{command} list` will show you a list of all birthdays we have on record. 📜"),
        divider(),
        section(
            f"`{command} find [a name]` will return the date for that person's birthday, "
            "if there is one. 🔎"
        ),
        section(
            f"`{command} find [a date]` will try to find people for that date. "
            "For best results use this format '1 January'. 📅"
        ),
        divider(),
        section(
            f"`{command} add Le P'tit Jesus on 25 Dec` will add that name for the given date. "
            "For best results use this format '1 January'. ✍️"
        ),
        divider(),
        section(
            f"`{command}` or `{command} help` will display this message. "
            "Very self-referential and _meta_. 🤓"
        ),
        fallback=f"How to use {command}",
    )
