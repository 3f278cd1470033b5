"""Sitemap generation engine — pure logic, no Streamlit dependency.

Orchestrates route normalization, param binding, language expansion,
pagination and XML generation. Can be reused in a FastAPI/Flask context.

Everything is recomputed on each call: no cache, no state between calls.
"""

from __future__ import annotations

import math
import re
from typing import Dict, List, Optional

from core.logger import ContextLogger
from modules.sitemap.config import SitemapConfig
from modules.sitemap.errors import ConfigurationError, PageRequestError
from modules.sitemap.lang import process_paths_with_lang
from modules.sitemap.models import PathRecord, SitemapResponse
from modules.sitemap.param_values import generate_paths_with_param_values
from modules.sitemap.routes import FileRouteEnumerator, RouteEnumerator, filter_routes
from modules.sitemap.xml_generator import generate_sitemap_index_xml, generate_sitemap_xml

# 1h CDN cache, no browser cache
DEFAULT_HEADERS = {
    "cache-control": "max-age=0, s-maxage=3600",
    "content-type": "application/xml",
}
ERROR_HEADERS = {"content-type": "text/plain; charset=utf-8"}
PAGE_PARAM_RE = re.compile(r"[1-9][0-9]*")


def merge_headers(custom: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Defaults overridden by custom headers, keys compared case-insensitively."""
    headers = dict(DEFAULT_HEADERS)
    headers.update({key.lower(): value for key, value in (custom or {}).items()})
    return headers


def deduplicate_paths(records: List[PathRecord]) -> List[PathRecord]:
    """Keep one record per path: the last one wins, at the first one's position."""
    unique: Dict[str, PathRecord] = {}
    for record in records:
        unique[record.path] = record
    return list(unique.values())


def count_pages(total: int, max_per_page: int) -> int:
    return math.ceil(total / max_per_page)


def resolve_page(page: str, total_pages: int) -> int:
    """Validate a `page` string from a `sitemap{N}.xml` request."""
    if not PAGE_PARAM_RE.fullmatch(page):
        raise PageRequestError(400, "Invalid page param")
    page_int = int(page)
    if page_int > total_pages:
        raise PageRequestError(404, "Page does not exist")
    return page_int


def paginate(records: List[PathRecord], page: int, max_per_page: int) -> List[PathRecord]:
    start = (page - 1) * max_per_page
    return records[start:start + max_per_page]


class SitemapEngine:
    """Main engine for sitemap generation.

    Takes a SitemapConfig and a route enumerator (any callable returning page
    identifiers such as `/src/routes/blog/[slug]/+page.svelte`) and produces
    the sitemap response for the requested page.
    """

    def __init__(
        self,
        config: SitemapConfig,
        route_enumerator: Optional[RouteEnumerator] = None,
        logger: Optional[ContextLogger] = None,
    ):
        self.config = config
        self.route_enumerator = route_enumerator or FileRouteEnumerator()
        self.logger = logger or ContextLogger(site=config.origin, page=config.page)

    # ── PATHS ─────────────────────────────────────────────────────────────

    def generate_paths(self) -> List[PathRecord]:
        """Route-derived paths: non-lang paths first, then lang variants."""
        cfg = self.config
        routes = filter_routes(self.route_enumerator(), cfg.exclude_route_patterns)
        self.logger.debug(f"{len(routes)} routes after normalization")

        bound = generate_paths_with_param_values(
            routes, cfg.param_values, cfg.default_changefreq, cfg.default_priority
        )
        with_lang = process_paths_with_lang(bound.with_lang, cfg.lang)
        return [*bound.without_lang, *with_lang]

    def generate_additional_paths(self) -> List[PathRecord]:
        """Extra paths (files in `static/`, etc.), never language-expanded."""
        cfg = self.config
        return [
            PathRecord(
                path=path if path.startswith("/") else f"/{path}",
                changefreq=cfg.default_changefreq,
                priority=cfg.default_priority,
            )
            for path in cfg.additional_paths
        ]

    def build_path_records(self) -> List[PathRecord]:
        """Final ordered record list, before pagination."""
        cfg = self.config
        records = [*self.generate_paths(), *self.generate_additional_paths()]

        if cfg.process_paths:
            records = list(cfg.process_paths(list(records)))
            for record in records:
                if not isinstance(record, PathRecord) or not record.path.startswith("/"):
                    raise ConfigurationError(
                        f"Sitemap: processPaths must return PathRecords with absolute paths, got {record!r}."
                    )

        records = deduplicate_paths(records)
        if cfg.sort == "alpha":
            records.sort(key=lambda r: r.path)
        return records

    # ── RESPONSE ──────────────────────────────────────────────────────────

    def response(self) -> SitemapResponse:
        """Sitemap, sitemap index or 400/404 response for `config.page`."""
        cfg = self.config
        records = self.build_path_records()
        total_pages = count_pages(len(records), cfg.max_per_page)

        if cfg.page is None:
            if len(records) <= cfg.max_per_page:
                body = generate_sitemap_xml(cfg.origin, records)
            else:
                body = generate_sitemap_index_xml(cfg.origin, total_pages)
        else:
            try:
                page = resolve_page(cfg.page, total_pages)
            except PageRequestError as e:
                self.logger.warning(f"page {cfg.page!r}: {e.message} ({e.status})")
                return SitemapResponse(e.status, dict(ERROR_HEADERS), e.message)
            body = generate_sitemap_xml(cfg.origin, paginate(records, page, cfg.max_per_page))

        self.logger.info(f"{len(records)} paths, {total_pages} page(s)")
        return SitemapResponse(200, merge_headers(cfg.headers), body)

    def get_stats(self, records: List[PathRecord]) -> Dict:
        """Return summary statistics for a generated path list."""
        if not records:
            return {"total": 0, "total_pages": 0, "with_alternates": 0, "by_changefreq": {}}
        by_freq: Dict[str, int] = {}
        for r in records:
            cf = r.changefreq or "—"
            by_freq[cf] = by_freq.get(cf, 0) + 1
        return {
            "total": len(records),
            "total_pages": count_pages(len(records), self.config.max_per_page),
            "with_alternates": sum(1 for r in records if r.alternates),
            "by_changefreq": dict(sorted(by_freq.items(), key=lambda x: -x[1])),
        }


def generate_sitemap_response(
    config: SitemapConfig,
    route_enumerator: Optional[RouteEnumerator] = None,
    logger: Optional[ContextLogger] = None,
) -> SitemapResponse:
    """Convenience wrapper: one engine, one response."""
    return SitemapEngine(config, route_enumerator, logger).response()
