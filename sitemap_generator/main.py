"""Main entry point for the sitemap generator command line tool."""

import argparse
import importlib
import logging
import sys
import xml.etree.ElementTree as ET
from urllib.parse import urlsplit

import requests

from .config import ConfigurationError, GeneratorConfig
from .generator import SitemapGenerator
from .sources import RemoteSitemapSource


def load_source(spec: str):
    """Import a source given as ``package.module:attribute``."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ImportError(f"Invalid source {spec!r}, expected 'module:attribute'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ImportError(f"Module {module_name!r} has no attribute {attr!r}") from None


def remote_source_name(url: str) -> str:
    """Group name for a remote sitemap: its host, e.g. ``blog.example.com``."""
    return urlsplit(url).netloc.replace(":", "_") or "remote"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate sitemap files and a sitemap index from data sources."
    )
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        metavar="MODULE:ATTR",
        help="Importable sitemap source; may be given several times.",
    )
    parser.add_argument(
        "--remote",
        action="append",
        default=[],
        metavar="URL",
        help="Existing sitemap (or sitemap index) whose entries are merged in.",
    )
    parser.add_argument(
        "--page",
        action="append",
        default=[],
        metavar="PATH",
        help="Site path added to the custom sitemap, e.g. /about.",
    )
    parser.add_argument("--site-url", help="Site base URL (SITEMAP_SITE_URL).")
    parser.add_argument(
        "--public-root", help="Directory receiving the sitemap files (SITEMAP_PUBLIC_ROOT)."
    )
    parser.add_argument(
        "--no-lastmod",
        action="store_true",
        help="Leave <lastmod> out of the generated sitemaps.",
    )
    parser.add_argument(
        "--localize",
        action="store_true",
        help="Prefix URLs with a locale and add alternate language links.",
    )
    parser.add_argument("--default-locale", help="Locale used for <loc> when localizing.")
    parser.add_argument("--locales", help="Comma separated list of available locales.")
    parser.add_argument(
        "--max-tags-count", type=int, default=None, help="Maximum URLs per sitemap file."
    )
    parser.add_argument(
        "--chunk-size", type=int, default=None, help="Records fetched per source batch."
    )
    parser.add_argument(
        "--skip-failed-sources",
        action="store_true",
        help="Log and skip sources that fail instead of aborting.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main():
    """Parses command-line arguments and runs the sitemap generator."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GeneratorConfig.from_env(
            site_url=args.site_url,
            public_root=args.public_root,
            use_lastmod=False if args.no_lastmod else None,
            localize=True if args.localize else None,
            default_locale=args.default_locale,
            available_locales=args.locales,
            max_tags_count=args.max_tags_count,
            chunk_size=args.chunk_size,
            on_source_error="skip" if args.skip_failed_sources else None,
        )
        sources = [load_source(spec) for spec in args.source]
        sources.extend(
            RemoteSitemapSource(url, name=remote_source_name(url)) for url in args.remote
        )

        generator = SitemapGenerator(config, sources)
        for page in args.page:
            generator.attach_custom(page)
        generator.to_xml()

        print(f"Wrote {len(generator.groups)} sitemap files to {generator.sitemap_dir}")
        print(f"Sitemap index: {generator.index_path}")
    except (
        ConfigurationError,
        ImportError,
        requests.exceptions.RequestException,
        ET.ParseError,
        OSError,
    ) as e:
        print(f"An error occurred during generation: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
