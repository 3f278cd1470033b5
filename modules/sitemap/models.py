"""Sitemap data structures shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Alternate:
    """One hreflang variant of a page."""
    lang: str
    path: str


@dataclass(frozen=True)
class PathRecord:
    """One concrete sitemap entry."""
    path: str
    changefreq: Optional[str] = None
    priority: Optional[float] = None
    lastmod: Optional[str] = None
    alternates: Optional[Tuple[Alternate, ...]] = None


@dataclass(frozen=True)
class LanguageConfig:
    """Default language + alternates, e.g. LanguageConfig("en", ("de", "zh"))."""
    default: str
    alternates: Tuple[str, ...] = ()

    @property
    def codes(self) -> List[str]:
        return [self.default, *self.alternates]


@dataclass
class SitemapResponse:
    """Transport-agnostic HTTP response (status, headers, body)."""
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
