from urllib.parse import urlsplit

import pytest

from sitemap_generator.config import GeneratorConfig
from sitemap_generator.localizer import UrlLocalizer, absolute_url, site_url_resolver

SITE_URL = "https://www.example.com"


def make_localizer(localize=True, locales=("en", "fr", "de"), default_locale="en"):
    config = GeneratorConfig(
        site_url=SITE_URL,
        localize=localize,
        default_locale=default_locale,
        available_locales=locales,
    )
    return UrlLocalizer(config, site_url_resolver(config))


# --- Tests for absolute_url ---


@pytest.mark.parametrize(
    "base, path, expected",
    [
        ("https://www.example.com", "/about", "https://www.example.com/about"),
        ("https://www.example.com/", "/about", "https://www.example.com/about"),
        ("https://www.example.com", "about", "https://www.example.com/about"),
        ("https://www.example.com/", "", "https://www.example.com"),
        ("https://www.example.com", "https://cdn.example.com/a", "https://cdn.example.com/a"),
    ],
)
def test_absolute_url(base, path, expected):
    assert absolute_url(base, path) == expected


# --- Tests for UrlLocalizer ---


def test_resolve_replaces_existing_locale_segment():
    """Tests the stored locale is stripped before the target one is applied."""
    localizer = make_localizer()
    resolved = localizer.resolve("/en/products/shoe", locale="fr")
    assert urlsplit(resolved).path == "/fr/products/shoe"
    assert resolved == f"{SITE_URL}/fr/products/shoe"


def test_resolve_uses_default_locale_when_localized():
    localizer = make_localizer()
    assert localizer.resolve("/products/shoe") == f"{SITE_URL}/en/products/shoe"


def test_resolve_without_localization_keeps_path():
    localizer = make_localizer(localize=False, default_locale=None)
    assert localizer.resolve("/fr/products/shoe") == f"{SITE_URL}/products/shoe"
    assert localizer.resolve("/products/shoe") == f"{SITE_URL}/products/shoe"


def test_resolve_keeps_query_string():
    localizer = make_localizer()
    assert (
        localizer.resolve("/de/search?q=boots&page=2", locale="fr")
        == f"{SITE_URL}/fr/search?q=boots&page=2"
    )


def test_resolve_absolute_url_input():
    """Tests that absolute URLs are reduced to their path before localizing."""
    localizer = make_localizer()
    assert (
        localizer.resolve("https://old.example.com/en/blog/post", locale="de")
        == f"{SITE_URL}/de/blog/post"
    )


def test_resolve_only_strips_first_segment():
    localizer = make_localizer()
    assert localizer.resolve("/blog/en/post", locale="fr") == f"{SITE_URL}/fr/blog/en/post"


def test_resolve_unknown_locale_segment_is_kept():
    localizer = make_localizer()
    assert localizer.resolve("/it/pagina", locale="fr") == f"{SITE_URL}/fr/it/pagina"


def test_resolve_empty_path():
    """Tests a URL without a path yields the bare locale or the site base."""
    assert make_localizer().resolve("https://www.example.com", locale="fr") == f"{SITE_URL}/fr"
    unlocalized = make_localizer(localize=False, default_locale=None)
    assert unlocalized.resolve("https://www.example.com") == SITE_URL


def test_resolve_uses_injected_resolver():
    config = GeneratorConfig(
        site_url=SITE_URL,
        localize=True,
        default_locale="en",
        available_locales=("en", "fr"),
    )
    calls = []

    def resolver(path):
        calls.append(path)
        return "https://cdn.test" + path

    localizer = UrlLocalizer(config, resolver)
    assert localizer.resolve("/fr/a") == "https://cdn.test/en/a"
    assert calls == ["/en/a"]


def test_strip_locale():
    localizer = make_localizer()
    assert localizer.strip_locale("/en") == ""
    assert localizer.strip_locale("/en/") == "/"
    assert localizer.strip_locale("/shop") == "/shop"


def test_resolve_keeps_fragment():
    localizer = make_localizer()
    assert localizer.resolve("/en/faq#shipping", locale="de") == f"{SITE_URL}/de/faq#shipping"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("/about", True),
        ("about", True),
        ("https://www.example.com/about", True),
        ("https://WWW.Example.com/about", True),
        ("https://other.org/about", False),
        ("https://example.com/about", False),
    ],
)
def test_is_site_url(url, expected):
    assert make_localizer().is_site_url(url) is expected
