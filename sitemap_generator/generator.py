"""Facade tying collection, rendering and indexing together."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from .collector import ItemCollector, ItemGroups
from .config import GeneratorConfig
from .index_builder import SitemapIndexBuilder
from .items import LastModified
from .localizer import UrlLocalizer, UrlResolver, site_url_resolver
from .renderer import Clock, SitemapRenderer
from .sources import SitemapSource

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def clean_directory(directory: Path) -> None:
    """Remove everything inside *directory* while keeping the directory."""
    for path in Path(directory).iterdir():
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()


class SitemapGenerator:
    """Generates the sitemap files and the sitemap index for a site.

    Items are collected from *sources* when the generator is created;
    :meth:`to_xml` writes one file per group and returns the index. The
    collaborators are injectable, which keeps tests free of real clocks:

    >>> generator = SitemapGenerator(cfg, [PostSource()], clock=lambda: frozen)
    >>> generator.attach_custom("/about").to_xml()
    """

    def __init__(
        self,
        config: GeneratorConfig,
        sources: Iterable[SitemapSource] = (),
        *,
        url_resolver: Optional[UrlResolver] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.url_resolver = (
            url_resolver if url_resolver is not None else site_url_resolver(config)
        )
        self.clock = clock if clock is not None else utc_now

        self.localizer = UrlLocalizer(config, self.url_resolver)
        self.collector = ItemCollector(config, self.url_resolver)
        self.renderer = SitemapRenderer(
            config, self.localizer, self.url_resolver, self.clock
        )
        self.index_builder = SitemapIndexBuilder(config, self.url_resolver)

        self.sitemap_dir.mkdir(parents=True, exist_ok=True)
        self.groups: ItemGroups = self.collector.collect(sources)

    @property
    def sitemap_dir(self) -> Path:
        return self.config.sitemap_dir

    @property
    def index_path(self) -> Path:
        return self.config.index_path

    def attach_custom(self, path: str, lastmod: LastModified = None) -> "SitemapGenerator":
        """Add a single page by its site path, e.g. ``attach_custom("/about")``."""
        self.collector.attach_custom(self.groups, path, lastmod)
        return self

    def to_dict(self) -> ItemGroups:
        """Return the collected groups keyed by group name."""
        return {name: list(items) for name, items in self.groups.items()}

    def to_xml(self) -> str:
        """Write every group to the sitemap directory and return the index.

        The directory is only emptied when there is something to render, so
        a run without items leaves earlier files (and their index entries) in
        place.
        """
        if self.groups:
            clean_directory(self.sitemap_dir)

        for name, items in self.groups.items():
            self.renderer.write(name, items, self.sitemap_dir)
        logger.info(
            "Rendered %d items into %d sitemap files",
            self.collector.total_items(self.groups),
            len(self.groups),
        )
        return self.index_builder.build(self.sitemap_dir, self.index_path)
