"""Building the ``<sitemapindex>`` that points at every generated sitemap."""

from __future__ import annotations

import logging
import os
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List

from .config import GeneratorConfig
from .localizer import UrlResolver
from .parser import NAMESPACE
from .renderer import to_document

logger = logging.getLogger(__name__)


class SitemapIndexBuilder:
    """Lists the sitemap directory and persists the matching index document."""

    def __init__(self, config: GeneratorConfig, url_resolver: UrlResolver):
        self.config = config
        self.url_resolver = url_resolver

    def sitemap_files(self, directory: Path) -> List[Path]:
        return sorted(
            (path for path in Path(directory).iterdir() if path.is_file()),
            key=lambda path: path.name,
        )

    def render(self, directory: Path) -> str:
        base = self.url_resolver(self.config.sitemap_dir_name)
        sitemapindex = ET.Element("sitemapindex", xmlns=NAMESPACE)
        for path in self.sitemap_files(directory):
            sitemap = ET.SubElement(sitemapindex, "sitemap")
            ET.SubElement(sitemap, "loc").text = f"{base}/{path.name}"
        return to_document(sitemapindex)

    def build(self, directory: Path, index_path: Path) -> str:
        """Write the index for *directory* to *index_path* and return it.

        The document is written next to *index_path* first and moved into
        place with ``os.replace`` so readers never see a partial index.
        """
        index_path = Path(index_path)
        index_path.parent.mkdir(parents=True, exist_ok=True)
        xml = self.render(directory)

        fd, tmp_name = tempfile.mkstemp(
            dir=index_path.parent, prefix=f".{index_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                fp.write(xml)
            os.replace(tmp_name, index_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info("Wrote sitemap index %s", index_path)
        return index_path.read_text(encoding="utf-8")
