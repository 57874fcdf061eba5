"""The sitemap entry value type shared by sources, collector and renderer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union

LastModified = Union[str, date, None]


def format_lastmod(value: LastModified) -> Optional[str]:
    """Normalize a last-modified value to an ISO 8601 string (or ``None``).

    Datetimes are converted to UTC with seconds precision; strings are only
    stripped of surrounding whitespace.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        # W3C datetime needs a zone once a time is present; naive values are UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class SitemapItem:
    """A single ``<url>`` entry: its location and optional last-modified stamp."""

    url: str
    lastmod: Optional[str] = None

    @classmethod
    def create(cls, url: str, lastmod: LastModified = None) -> "SitemapItem":
        return cls(url=url, lastmod=format_lastmod(lastmod))

    # A SitemapItem is itself a valid record, so sources may yield items directly
    def get_url(self) -> str:
        return self.url

    def get_last_modified(self) -> Optional[str]:
        return self.lastmod
