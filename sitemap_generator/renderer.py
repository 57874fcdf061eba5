"""Serialization of item groups into sitemap ``<urlset>`` documents."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from .config import GeneratorConfig
from .items import SitemapItem
from .localizer import UrlLocalizer, UrlResolver
from .parser import NAMESPACE

logger = logging.getLogger(__name__)

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

Clock = Callable[[], datetime]


def to_document(root: ET.Element) -> str:
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


class SitemapRenderer:
    """Renders one group of items into a sitemap document."""

    def __init__(
        self,
        config: GeneratorConfig,
        localizer: UrlLocalizer,
        url_resolver: UrlResolver,
        clock: Clock,
    ):
        self.config = config
        self.localizer = localizer
        self.url_resolver = url_resolver
        self.clock = clock

    def localizes(self, url: str) -> bool:
        return self.config.localize and self.localizer.is_site_url(url)

    def location(self, url: str) -> str:
        """Absolute <loc> for *url*; URLs on other hosts are kept verbatim."""
        if self.localizes(url):
            return self.localizer.resolve(url)
        if url.startswith("/"):
            return self.url_resolver(url)
        return url

    def render(self, items: Iterable[SitemapItem]) -> str:
        """Return the ``<urlset>`` document for *items*.

        Items without their own lastmod inherit the most recent lastmod seen
        earlier in the group, or the render time before any was seen.
        """
        urlset = ET.Element("urlset", xmlns=NAMESPACE)
        if self.config.localize:
            urlset.set("xmlns:xhtml", XHTML_NAMESPACE)

        current_lastmod = self.clock().isoformat(timespec="seconds")
        for item in items:
            url = ET.SubElement(urlset, "url")
            ET.SubElement(url, "loc").text = self.location(item.url)

            if self.localizes(item.url):
                for locale in self.config.available_locales:
                    ET.SubElement(
                        url,
                        "xhtml:link",
                        rel="alternate",
                        hreflang=locale,
                        href=self.localizer.resolve(item.url, locale),
                    )

            if self.config.use_lastmod:
                ET.SubElement(url, "lastmod").text = item.lastmod or current_lastmod

            if item.lastmod:
                current_lastmod = item.lastmod

        return to_document(urlset)

    def write(self, group_name: str, items: Iterable[SitemapItem], directory: Path) -> Path:
        """Render *items* to ``<directory>/<group_name>.xml``."""
        path = Path(directory) / f"{group_name}.xml"
        path.write_text(self.render(items), encoding="utf-8")
        logger.debug("Wrote sitemap %s", path)
        return path
