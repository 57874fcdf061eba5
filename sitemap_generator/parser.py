"""Reading entries back out of sitemap and sitemap index documents."""

import xml.etree.ElementTree as ET
from typing import List

from .items import SitemapItem

# Namespace for sitemap XML files
NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


class SitemapParser:
    """Extracts locations and entries from parsed sitemap XML."""

    def is_sitemap_index(self, element: ET.Element) -> bool:
        """Checks if the given XML element is a sitemap index.

        Args:
            element: The root XML element of the fetched content.

        Returns:
            True if the element is a ``<sitemapindex>``, False otherwise.
        """
        return element.tag.endswith("}sitemapindex")

    def extract_loc_elements(self, element: ET.Element) -> List[str]:
        """Returns the text of every non-empty ``<loc>`` under *element*."""
        locations = element.findall(f".//{{{NAMESPACE}}}loc")
        return [loc.text.strip() for loc in locations if loc.text and loc.text.strip()]

    def extract_entries(self, element: ET.Element) -> List[SitemapItem]:
        """Extracts ``<url>`` entries with their optional ``<lastmod>``.

        Args:
            element: The root ``<urlset>`` element.

        Returns:
            One SitemapItem per ``<url>`` that has a location, in document order.
        """
        entries = []
        for url in element.findall(f".//{{{NAMESPACE}}}url"):
            loc = (url.findtext(f"{{{NAMESPACE}}}loc") or "").strip()
            if not loc:
                continue
            lastmod = url.findtext(f"{{{NAMESPACE}}}lastmod")
            entries.append(SitemapItem.create(loc, lastmod))
        return entries
