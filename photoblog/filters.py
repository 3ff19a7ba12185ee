"""Filters registered on every template."""

from datetime import datetime
from typing import Iterable

from markupsafe import Markup, escape

from photoblog.slugs import slugify


def format_datetime(value: datetime | None, format_str: str = "%Y-%m-%d") -> str:
    """Format a datetime with strftime; anything else is passed through str()."""
    if value is None:
        return ""
    if not isinstance(value, datetime):
        return str(value)
    return value.strftime(format_str)


def isoformat(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.isoformat()


def join_tags(tags: Iterable[str], sep: str = ", ") -> str:
    return sep.join(tags)


def nl2br(value: str | None) -> Markup:
    """Escape text and turn its line breaks into <br>."""
    return Markup("<br>\n").join(escape(line) for line in (value or "").splitlines())


FILTERS = {
    "format_datetime": format_datetime,
    "isoformat": isoformat,
    "join_tags": join_tags,
    "nl2br": nl2br,
    "slugify": slugify,
}
