"""Ad card formatting from the ads sheet.

Sheet authors spell headers differently ("Title", "title", ...), so each
card field resolves through an ordered alias list from config.
"""

from typing import Mapping
from urllib.parse import quote

from config import (
    ADS_DEFAULT_ACTION_LINK,
    ADS_DEFAULT_ACTION_TEXT,
    ADS_FIELD_ALIASES,
    ADS_PLACEHOLDER_IMAGE,
)
from services.dataset import Dataset


def first_match(record: Mapping[str, str], candidates: tuple[str, ...]) -> str:
    """First non-blank value among ``candidates``, else ""."""
    for name in candidates:
        value = record.get(name, "")
        if value.strip():
            return value.strip()
    return ""


def placeholder_image(title: str) -> str:
    return ADS_PLACEHOLDER_IMAGE.format(text=quote(title or "Ad"))


def format_ad(
    record: Mapping[str, str],
    aliases: Mapping[str, tuple[str, ...]] | None = None,
) -> dict | None:
    if aliases is None:
        aliases = ADS_FIELD_ALIASES
    title = first_match(record, aliases["title"])
    message = first_match(record, aliases["message"])
    if not title and not message:
        return None

    return {
        "title": title,
        "message": message,
        "imageUrl": first_match(record, aliases["imageUrl"]) or placeholder_image(title),
        "actionLink": first_match(record, aliases["actionLink"]) or ADS_DEFAULT_ACTION_LINK,
        "actionText": first_match(record, aliases["actionText"]) or ADS_DEFAULT_ACTION_TEXT,
    }


def format_ads(dataset: Dataset) -> list[dict]:
    ads = (format_ad(record) for record in dataset.records)
    return [ad for ad in ads if ad is not None]
