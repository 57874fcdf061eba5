"""Locale-aware URL rewriting and absolute URL resolution."""

from __future__ import annotations

from typing import Callable, Optional
from urllib.parse import urlsplit

from .config import GeneratorConfig

# Maps a site path such as "/about" to an absolute URL
UrlResolver = Callable[[str], str]


def absolute_url(base: str, path: str) -> str:
    """Join *path* onto the site *base*.

    Paths that already carry a scheme are returned untouched and an empty
    path resolves to the base itself.
    """
    if urlsplit(path).scheme:
        return path
    base = base.rstrip("/")
    if not path:
        return base
    if not path.startswith("/"):
        path = "/" + path
    return base + path


def site_url_resolver(config: GeneratorConfig) -> UrlResolver:
    """Return the default resolver bound to ``config.site_url``."""
    return lambda path: absolute_url(config.site_url, path)


class UrlLocalizer:
    """Strips locale segments from URLs and re-applies a target locale."""

    def __init__(self, config: GeneratorConfig, url_resolver: UrlResolver):
        self.config = config
        self.url_resolver = url_resolver

    def strip_locale(self, url: str) -> str:
        """Return path, query and fragment of *url* minus a leading locale segment.

        Only the first path segment is inspected, so ``/en/products`` becomes
        ``/products`` while ``/products/en`` is left alone.
        """
        parts = urlsplit(url)
        segments = parts.path.split("/")
        if len(segments) > 1 and segments[1] in self.config.available_locales:
            del segments[1]
        path = "/".join(segments)
        if parts.query:
            path = f"{path}?{parts.query}"
        if parts.fragment:
            path = f"{path}#{parts.fragment}"
        return path

    def is_site_url(self, url: str) -> bool:
        """True for relative URLs and absolute ones on the configured site host."""
        netloc = urlsplit(url).netloc.lower()
        return not netloc or netloc == urlsplit(self.config.site_url).netloc.lower()

    def resolve(self, url: str, locale: Optional[str] = None) -> str:
        """Resolve *url* to an absolute URL in *locale*.

        Without an explicit locale the configured default locale is used when
        localization is enabled, otherwise the stripped path is resolved as-is.
        """
        path = self.strip_locale(url)
        if locale is None and self.config.localize:
            locale = self.config.default_locale
        if locale:
            path = f"/{locale}{self._leading_slash(path)}"
        return self.url_resolver(path)

    @staticmethod
    def _leading_slash(path: str) -> str:
        if not path or path.startswith("/"):
            return path
        return "/" + path
