"""Configuration for the sitemap generator.

Settings can be passed directly to :class:`GeneratorConfig` or loaded from the
environment through :meth:`GeneratorConfig.from_env`, which also reads a
``.env`` file placed in the project root:

```env
# .env
SITEMAP_SITE_URL=https://www.example.com
SITEMAP_PUBLIC_ROOT=public
SITEMAP_LOCALIZE=true
SITEMAP_DEFAULT_LOCALE=en
SITEMAP_AVAILABLE_LOCALES=en,fr,de
```

The variables are loaded via *python‑dotenv*.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from dotenv import load_dotenv

# sitemaps.org caps a single sitemap file at 50,000 URLs
PROTOCOL_MAX_TAGS = 50000

SOURCE_ERROR_POLICIES = ("raise", "skip")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigurationError(ValueError):
    """Raised when the generator is configured inconsistently."""


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def parse_locales(value: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """Normalize a comma separated string (or iterable) into an ordered tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    locales = []
    for locale in value:
        locale = locale.strip()
        if locale and locale not in locales:
            locales.append(locale)
    return tuple(locales)


@dataclass
class GeneratorConfig:
    """Configuration for the SitemapGenerator."""

    site_url: str
    public_root: Union[str, Path] = "public"
    use_lastmod: bool = True
    chunk_size: int = 100
    max_tags_count: int = 10000
    default_locale: Optional[str] = None
    available_locales: Tuple[str, ...] = field(default_factory=tuple)
    localize: bool = False
    sitemap_dir_name: str = "sitemap_files"
    index_filename: str = "sitemap.xml"
    on_source_error: str = "raise"

    def __post_init__(self):
        self.public_root = Path(self.public_root)
        self.available_locales = parse_locales(self.available_locales)
        self.validate()

    def validate(self) -> None:
        """Fail fast on settings that would otherwise produce malformed XML."""
        if not self.site_url:
            raise ConfigurationError("site_url is required")
        if self.chunk_size <= 0:
            raise ConfigurationError("chunk_size must be a positive integer")
        if self.max_tags_count <= 0:
            raise ConfigurationError("max_tags_count must be a positive integer")
        if self.max_tags_count > PROTOCOL_MAX_TAGS:
            raise ConfigurationError(
                f"max_tags_count must not exceed {PROTOCOL_MAX_TAGS} "
                f"(got {self.max_tags_count})"
            )
        if self.on_source_error not in SOURCE_ERROR_POLICIES:
            raise ConfigurationError(
                f"on_source_error must be one of {SOURCE_ERROR_POLICIES}, "
                f"got {self.on_source_error!r}"
            )
        if self.localize:
            if not self.default_locale:
                raise ConfigurationError(
                    "default_locale is required when localization is enabled"
                )
            if self.default_locale not in self.available_locales:
                raise ConfigurationError(
                    f"default_locale {self.default_locale!r} is not one of "
                    f"the available locales {self.available_locales}"
                )

    @property
    def sitemap_dir(self) -> Path:
        return self.public_root / self.sitemap_dir_name

    @property
    def index_path(self) -> Path:
        return self.public_root / self.index_filename

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        """Build a config from ``SITEMAP_*`` environment variables.

        Keyword arguments that are not ``None`` take precedence over the
        environment.
        """
        # Load variables from .env if present; silently ignore missing file
        load_dotenv()

        values = {
            "site_url": os.getenv("SITEMAP_SITE_URL", ""),
            "public_root": os.getenv("SITEMAP_PUBLIC_ROOT", "public"),
            "use_lastmod": _parse_bool(
                "SITEMAP_USE_LASTMOD", os.getenv("SITEMAP_USE_LASTMOD", "true")
            ),
            "chunk_size": _parse_int(
                "SITEMAP_CHUNK_SIZE", os.getenv("SITEMAP_CHUNK_SIZE", "100")
            ),
            "max_tags_count": _parse_int(
                "SITEMAP_MAX_TAGS_COUNT", os.getenv("SITEMAP_MAX_TAGS_COUNT", "10000")
            ),
            "default_locale": os.getenv("SITEMAP_DEFAULT_LOCALE") or None,
            "available_locales": parse_locales(
                os.getenv("SITEMAP_AVAILABLE_LOCALES", "")
            ),
            "localize": _parse_bool(
                "SITEMAP_LOCALIZE", os.getenv("SITEMAP_LOCALIZE", "false")
            ),
            "on_source_error": os.getenv("SITEMAP_ON_SOURCE_ERROR", "raise"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
