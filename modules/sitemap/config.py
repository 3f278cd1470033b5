"""Sitemap configuration — validated once, then treated as read-only."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from modules.sitemap.errors import ConfigurationError
from modules.sitemap.models import LanguageConfig, PathRecord
from modules.sitemap.param_values import ParamValueSource, parse_param_values
from modules.sitemap.strategies import validate_changefreq, validate_priority
from modules.sitemap.xml_generator import MAX_URLS_PER_SITEMAP

SORT_MODES = ("alpha",)

ProcessPaths = Callable[[List[PathRecord]], List[PathRecord]]

# camelCase keys accepted by SitemapConfig.from_dict (JSON configs, API payloads)
_CAMEL_KEYS = {
    "excludeRoutePatterns": "exclude_route_patterns",
    "paramValues": "param_values",
    "additionalPaths": "additional_paths",
    "maxPerPage": "max_per_page",
    "defaultChangefreq": "default_changefreq",
    "defaultPriority": "default_priority",
    "processPaths": "process_paths",
}


def _language_config(value: Union[LanguageConfig, Mapping, None]) -> Optional[LanguageConfig]:
    if value is None or isinstance(value, LanguageConfig):
        return value
    if not isinstance(value, Mapping) or not value.get("default"):
        raise ConfigurationError(
            "Sitemap: `lang` must provide a `default` language code and a list of `alternates`."
        )
    return LanguageConfig(
        default=str(value["default"]),
        alternates=tuple(str(code) for code in value.get("alternates") or ()),
    )


@dataclass
class SitemapConfig:
    """Everything one sitemap response depends on.

    `param_values` may be given raw (lists, lists of lists, records); it is
    classified into ScalarValues / TupleValues / RecordValues here, so shape
    errors surface before any route is processed.
    """

    origin: str = ""
    exclude_route_patterns: List[str] = field(default_factory=list)
    param_values: Dict[str, ParamValueSource] = field(default_factory=dict)
    additional_paths: List[str] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    lang: Optional[LanguageConfig] = None
    max_per_page: int = MAX_URLS_PER_SITEMAP
    page: Optional[str] = None
    sort: Optional[str] = None
    default_changefreq: Optional[str] = None
    default_priority: Optional[float] = None
    process_paths: Optional[ProcessPaths] = None

    def __post_init__(self):
        if not self.origin:
            raise ConfigurationError("Sitemap: `origin` property is required in sitemap config.")
        if not re.match(r"^https?://", self.origin):
            raise ConfigurationError(
                f"Sitemap: `origin` must be an absolute http(s) URL, got {self.origin!r}."
            )
        self.origin = self.origin.rstrip("/")

        self.exclude_route_patterns = list(self.exclude_route_patterns or [])
        self.additional_paths = list(self.additional_paths or [])
        self.headers = dict(self.headers or {})
        self.lang = _language_config(self.lang)
        self.param_values = parse_param_values(self.param_values)

        if isinstance(self.max_per_page, bool) or not isinstance(self.max_per_page, int) or self.max_per_page < 1:
            raise ConfigurationError(
                f"Sitemap: `maxPerPage` must be a positive integer, got {self.max_per_page!r}."
            )
        if not self.sort:
            self.sort = None
        elif self.sort not in SORT_MODES:
            raise ConfigurationError(f"Sitemap: `sort` must be 'alpha' or unset, got {self.sort!r}.")

        self.default_changefreq = validate_changefreq(self.default_changefreq)
        self.default_priority = validate_priority(self.default_priority)

        if self.page is not None:
            self.page = str(self.page) or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SitemapConfig":
        """Build a config from a plain dict, camelCase or snake_case keys."""
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ConfigurationError(f"Sitemap: unknown config property {key!r}.")
            kwargs[name] = value
        return cls(**kwargs)
