import codecs  # Import codecs for BOM
from datetime import datetime, timezone

import pytest
import requests

from sitemap_generator.config import GeneratorConfig
from sitemap_generator.fetcher import SitemapFetcher

SITE_URL = "https://www.example.com"
FROZEN_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
FROZEN_LASTMOD = "2024-05-01T12:00:00+00:00"

SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}
XHTML_NS = {"xhtml": "http://www.w3.org/1999/xhtml"}


# Helper class for mocking requests.get
class MockResponse:
    def __init__(self, xml_data, status_code=200, encoding="utf-8"):
        self.text = xml_data
        if isinstance(xml_data, str):
            self.content = xml_data.encode(encoding)
        else:  # Assume bytes if not string (e.g., for BOM)
            self.content = xml_data
        self.status_code = status_code
        self.ok = 200 <= status_code < 300

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")


class Record:
    """Minimal record implementing the sitemap record capability."""

    def __init__(self, url, lastmod=None):
        self.url = url
        self.lastmod = lastmod

    def get_url(self):
        return self.url

    def get_last_modified(self):
        return self.lastmod


class ListSource:
    """Source that records the batch sizes it was asked for."""

    def __init__(self, name, records):
        self.sitemap_name = name
        self.records = records
        self.requested_batch_sizes = []

    def list_items_paginated(self, batch_size):
        self.requested_batch_sizes.append(batch_size)
        for start in range(0, len(self.records), batch_size):
            yield self.records[start : start + batch_size]


class FailingSource:
    sitemap_name = "Broken"

    def list_items_paginated(self, batch_size):
        raise RuntimeError("database unavailable")


def make_source(name, count, prefix=None):
    prefix = prefix or name.lower()
    return ListSource(name, [Record(f"/{prefix}/{i}") for i in range(count)])


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def config(tmp_path):
    return GeneratorConfig(site_url=SITE_URL, public_root=tmp_path / "public")


@pytest.fixture
def localized_config(tmp_path):
    return GeneratorConfig(
        site_url=SITE_URL,
        public_root=tmp_path / "public",
        localize=True,
        default_locale="en",
        available_locales=("en", "fr", "de"),
    )


@pytest.fixture(autouse=True)
def reset_fetcher_throttle():
    """Keeps the class-level throttle timestamp from leaking between tests."""
    SitemapFetcher._last_request_ts = None
    yield
    SitemapFetcher._last_request_ts = None


# Monkeypatch requests.get
@pytest.fixture
def patch_requests(monkeypatch):
    """Patches requests.get to return controlled responses or raise errors."""

    bom_xml_content = (
        codecs.BOM_UTF8
        + """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
   <url><loc>http://bom.com/page1</loc></url>
</urlset>""".encode(
            "utf-8"
        )
    )

    responses = {
        "http://badxml.com/sitemap.xml": MockResponse("<root><unclosed-tag</root>"),
        "http://bom.com/sitemap.xml": MockResponse(bom_xml_content, encoding=None),
        "http://notfound.com/sitemap.xml": MockResponse(
            "<error>Not Found</error>", status_code=404
        ),
        "http://example.com/index.xml": MockResponse(
            """<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
                   <sitemap><loc>http://example.com/child1.xml</loc></sitemap>
                   <sitemap><loc>http://example.com/child2.xml</loc></sitemap>
                   <sitemap><loc>http://example.com/child1.xml</loc></sitemap>
               </sitemapindex>"""
        ),
        "http://example.com/child1.xml": MockResponse(
            """<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
                   <url><loc>http://example.com/page1</loc>
                        <lastmod>2023-01-01</lastmod></url>
                   <url><loc>http://example.com/page2</loc></url>
               </urlset>"""
        ),
        "http://example.com/child2.xml": MockResponse(
            """<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
                   <url><loc>http://example.com/page3</loc></url>
                   <url><loc>  </loc></url>
               </urlset>"""
        ),
    }
    requested = []

    def fake_get(url, **kwargs):  # Accept **kwargs to handle 'timeout'
        requested.append(url)
        if url == "http://error.com/sitemap.xml":
            raise requests.exceptions.RequestException("Network error")
        if url in responses:
            return responses[url]
        return MockResponse("<root/>", status_code=404)

    monkeypatch.setattr(requests, "get", fake_get)
    return requested


# Importable by the CLI tests as ``conftest:BLOG_SOURCE``
BLOG_SOURCE = ListSource("Blog", [Record("/blog/1"), Record("/blog/2", "2020-01-01")])
