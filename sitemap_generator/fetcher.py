"""HTTP access for :class:`~sitemap_generator.sources.RemoteSitemapSource`.

The generator itself never touches the network. This module exists only so a
sitemap already published elsewhere (a blog, a legacy site) can be merged in
as one more provider. Requests identify the tool through ``EMAIL`` and are
spaced at least ``REQUEST_INTERVAL_SECONDS`` apart (both read from ``.env``).
"""

from __future__ import annotations

import logging
import os
import time
import xml.etree.ElementTree as ET

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

CONTACT_EMAIL = os.getenv("EMAIL", "contact@example.com")
USER_AGENT = f"Sitemap Generator (+{CONTACT_EMAIL})"
REQUEST_INTERVAL = float(os.getenv("REQUEST_INTERVAL_SECONDS", "2"))


class SitemapFetcher:
    """Retrieves one remote sitemap document per call, as a parsed root element."""

    # Time of the last request made by any fetcher in this process
    _last_request_ts: float | None = None

    def __init__(
        self,
        *,
        timeout: int = 30,
        user_agent: str | None = None,
        request_interval: float | None = None,
    ):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent or USER_AGENT}
        self.request_interval = (
            REQUEST_INTERVAL if request_interval is None else request_interval
        )

    def _throttle(self) -> None:
        cls = type(self)
        if cls._last_request_ts is not None:
            wait = self.request_interval - (time.monotonic() - cls._last_request_ts)
            if wait > 0:
                time.sleep(wait)
        cls._last_request_ts = time.monotonic()

    def _parse(self, content: bytes) -> ET.Element:
        try:
            return ET.fromstring(content)
        except ET.ParseError:
            # Valid UTF-8 served with a misleading encoding declaration
            return ET.fromstring(content.decode("utf-8"))

    def fetch_sitemap(self, url: str) -> ET.Element:
        """Return the root element of the sitemap at *url*.

        Request and parse errors are logged and re-raised so the collector's
        source error policy decides what happens to the provider.
        """
        self._throttle()
        try:
            resp = requests.get(url, timeout=self.timeout, headers=self.headers)
            resp.raise_for_status()
            return self._parse(resp.content)
        except requests.exceptions.RequestException as e:
            logger.error("Error fetching sitemap %s: %s", url, e)
            raise
        except ET.ParseError as e:
            logger.error("Error parsing XML from %s: %s", url, e)
            raise
