"""Collecting sitemap items from sources and sharding them into groups."""

from __future__ import annotations

import logging
from typing import Container, Dict, Iterable, List, Sequence

from .config import GeneratorConfig
from .items import LastModified, SitemapItem
from .localizer import UrlResolver
from .sources import SitemapSource, source_name

logger = logging.getLogger(__name__)

# Group receiving items attached by hand rather than through a source
CUSTOM_GROUP = "custom"

ItemGroups = Dict[str, List[SitemapItem]]


def chunk_items(items: Sequence[SitemapItem], size: int) -> List[List[SitemapItem]]:
    """Split *items* into consecutive chunks of at most *size*, keeping order."""
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def group_name(base: str, index: int) -> str:
    """``Post``, ``Post_1``, ``Post_2``... for chunk 0, 1, 2..."""
    return f"{base}_{index}" if index else base


def group_names(
    base: str, chunks: Sequence[Sequence[SitemapItem]], taken: Container[str] = ()
) -> ItemGroups:
    """Name *chunks* ``base``, ``base_1``... skipping any name already in *taken*.

    Two sources that resolve to the same name therefore end up in
    ``Post``/``Post_1`` rather than the second replacing the first.
    """
    groups: ItemGroups = {}
    index = 0
    for chunk in chunks:
        while group_name(base, index) in taken or group_name(base, index) in groups:
            index += 1
        groups[group_name(base, index)] = list(chunk)
        index += 1
    return groups


class ItemCollector:
    """Pulls items out of sources in batches and shards them per file."""

    def __init__(self, config: GeneratorConfig, url_resolver: UrlResolver):
        self.config = config
        self.url_resolver = url_resolver

    def read_source(self, source: SitemapSource) -> List[SitemapItem]:
        """Read every record of *source*, ``chunk_size`` records at a time."""
        items: List[SitemapItem] = []
        for batch in source.list_items_paginated(self.config.chunk_size):
            items.extend(
                SitemapItem.create(record.get_url(), record.get_last_modified())
                for record in batch
            )
        return items

    def collect_source(
        self, source: SitemapSource, taken: Container[str] = ()
    ) -> ItemGroups:
        name = source_name(source)
        items = self.read_source(source)
        groups = group_names(
            name, chunk_items(items, self.config.max_tags_count), taken
        )
        logger.debug("Source %s: %d items in %d groups", name, len(items), len(groups))
        return groups

    def collect(self, sources: Iterable[SitemapSource]) -> ItemGroups:
        """Collect every source into one ordered mapping of group name to items.

        A failing source aborts the collection unless the config's
        ``on_source_error`` is ``"skip"``, in which case it is logged and left
        out.
        """
        groups: ItemGroups = {}
        for source in sources:
            try:
                groups.update(self.collect_source(source, groups))
            except Exception:
                if self.config.on_source_error != "skip":
                    raise
                logger.warning(
                    "Skipping sitemap source %s after a read failure",
                    source_name(source),
                    exc_info=True,
                )
        logger.info("Collected %d sitemap groups", len(groups))
        return groups

    def attach_custom(
        self, groups: ItemGroups, path: str, lastmod: LastModified = None
    ) -> SitemapItem:
        """Append a hand-made item to the custom bucket of *groups*.

        The path is resolved to an absolute URL right away. When the current
        custom group is full the item starts ``custom_1``, ``custom_2``...
        """
        item = SitemapItem.create(self.url_resolver(path), lastmod)
        index = 0
        name = CUSTOM_GROUP
        while len(groups.get(name, ())) >= self.config.max_tags_count:
            index += 1
            name = group_name(CUSTOM_GROUP, index)
        groups.setdefault(name, []).append(item)
        return item

    @staticmethod
    def total_items(groups: ItemGroups) -> int:
        return sum(len(items) for items in groups.values())
