"""Embedded media extraction from generated text."""

import re

IMAGE_MARKDOWN = re.compile(r"!\[.*?\]\((.*?)\)")


def extract_image(text: str) -> tuple[str, str | None]:
    """Pull the first markdown image out of `text`.

    Returns the text with that snippet removed and the image URL. Later
    matches are left in place.
    """
    match = IMAGE_MARKDOWN.search(text)
    if not match or not match.group(1):
        return text, None
    return text[: match.start()] + text[match.end():], match.group(1)
