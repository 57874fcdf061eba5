"""Data provider capabilities and the stock providers.

Anything that supplies sitemap entries implements :class:`SitemapSource`:
``list_items_paginated(batch_size)`` yields batches of records, and every
record implements :class:`SitemapRecord`. Sources may be instances or classes
(e.g. an ORM model exposing a classmethod), the generator only relies on the
two capabilities.
"""

from __future__ import annotations

import logging
from typing import (
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from .fetcher import SitemapFetcher
from .items import LastModified, SitemapItem
from .parser import SitemapParser

logger = logging.getLogger(__name__)


@runtime_checkable
class SitemapRecord(Protocol):
    def get_url(self) -> str: ...

    def get_last_modified(self) -> LastModified: ...


@runtime_checkable
class SitemapSource(Protocol):
    def list_items_paginated(
        self, batch_size: int
    ) -> Iterable[Sequence[SitemapRecord]]: ...


def source_name(source) -> str:
    """Name used for a source's group(s) and therefore its file name(s)."""
    name = getattr(source, "sitemap_name", None)
    if name:
        return name
    if isinstance(source, type):
        return source.__name__
    return type(source).__name__


def paginate(records: Sequence, batch_size: int) -> Iterator[Sequence]:
    """Yield consecutive slices of *records* holding at most *batch_size* items."""
    for start in range(0, len(records), batch_size):
        yield records[start : start + batch_size]


class TimestampedRecordMixin:
    """Default last-modified lookup for records with audit timestamps.

    Concrete records supply ``get_url()``; ``get_last_modified()`` falls back
    from ``updated_at`` to ``created_at`` and finally ``None``.
    """

    def get_url(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement get_url()")

    def get_last_modified(self) -> LastModified:
        updated_at = getattr(self, "updated_at", None)
        if updated_at is not None:
            return updated_at
        return getattr(self, "created_at", None)


class StaticSource:
    """A source backed by an in-memory sequence of records."""

    def __init__(self, records: Iterable[SitemapRecord], name: Optional[str] = None):
        self.records = list(records)
        if name:
            self.sitemap_name = name

    def list_items_paginated(self, batch_size: int) -> Iterator[Sequence[SitemapRecord]]:
        return paginate(self.records, batch_size)


class RemoteSitemapSource:
    """Imports the entries of an already published sitemap or sitemap index.

    Index children are visited breadth-first and each sitemap URL at most
    once. Fetch and parse errors propagate to the collector, which applies
    the configured source error policy.
    """

    def __init__(
        self,
        sitemap_url: str,
        *,
        fetcher: Optional[SitemapFetcher] = None,
        parser: Optional[SitemapParser] = None,
        name: Optional[str] = None,
    ):
        self.sitemap_url = sitemap_url
        # Use injected dependencies or fall back to concrete implementations
        self.fetcher = fetcher if fetcher is not None else SitemapFetcher()
        self.parser = parser if parser is not None else SitemapParser()
        if name:
            self.sitemap_name = name

    def iter_entries(self) -> Iterator[SitemapItem]:
        queue: List[str] = [self.sitemap_url]
        visited = set()
        while queue:
            url = queue.pop(0)
            if url in visited:
                continue
            visited.add(url)

            root = self.fetcher.fetch_sitemap(url)
            if self.parser.is_sitemap_index(root):
                children = self.parser.extract_loc_elements(root)
                logger.debug("Sitemap index %s lists %d sitemaps", url, len(children))
                queue.extend(child for child in children if child not in visited)
            else:
                entries = self.parser.extract_entries(root)
                logger.debug("Read %d entries from %s", len(entries), url)
                yield from entries

    def list_items_paginated(self, batch_size: int) -> Iterator[List[SitemapItem]]:
        batch: List[SitemapItem] = []
        for entry in self.iter_entries():
            batch.append(entry)
            if len(batch) >= batch_size:
                yield batch
                batch = []
        if batch:
            yield batch
