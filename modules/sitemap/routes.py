"""Route discovery and normalization — pure logic, no Streamlit dependency.

Turns page identifiers such as `/src/routes/(public)/blog/[slug]/+page.svelte`
into canonical route patterns (`/blog/[slug]`) and applies the exclusion
patterns of the sitemap config.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, List, Pattern, Sequence

from modules.sitemap.errors import ConfigurationError
from modules.sitemap.optional_params import expand_optional_routes

logger = logging.getLogger(__name__)

ROUTES_PREFIX = "/src/routes"
# +page.svelte, +page@.svelte, +page@layout.svelte, +page@(group).svelte
PAGE_SUFFIX_RE = re.compile(r"/\+page[^/]*\.svelte$")
PAGE_GLOB = "+page*.svelte"
GROUP_SEGMENT_RE = re.compile(r"/\([^)/]+\)")

RouteEnumerator = Callable[[], List[str]]


class FileRouteEnumerator:
    """Lists page identifiers from a route tree on disk.

    Identifiers always start with `/src/routes`, whatever the physical
    directory, so they normalize the same way as in-memory route lists.
    """

    def __init__(self, routes_dir: str | Path = "src/routes"):
        self.routes_dir = Path(routes_dir)

    def __call__(self) -> List[str]:
        if not self.routes_dir.is_dir():
            raise ConfigurationError(f"Sitemap: routes directory not found: '{self.routes_dir}'.")
        identifiers = sorted(
            f"{ROUTES_PREFIX}/{page.relative_to(self.routes_dir).as_posix()}"
            for page in self.routes_dir.rglob(PAGE_GLOB)
            if page.is_file()
        )
        logger.debug("%d page files under %s", len(identifiers), self.routes_dir)
        return identifiers


def normalize_trailing_slash(path: str) -> str:
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/")
    return path or "/"


def strip_route_decoration(identifier: str) -> str:
    """`/src/routes/(public)/about/+page.svelte` -> `/(public)/about`."""
    route = identifier
    if route.startswith(ROUTES_PREFIX):
        route = route[len(ROUTES_PREFIX):]
    route = PAGE_SUFFIX_RE.sub("", route)
    if route and not route.startswith("/"):
        route = f"/{route}"
    return normalize_trailing_slash(route)


def strip_groups(route: str) -> str:
    """Drop decorative `(group)` segments: `/(public)/about` -> `/about`."""
    return normalize_trailing_slash(GROUP_SEGMENT_RE.sub("", route))


def compile_exclusions(patterns: Sequence[str]) -> List[Pattern]:
    compiled = []
    for pattern in patterns or []:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(
                f"Sitemap: invalid regex in excludeRoutePatterns: {pattern!r} ({e})."
            ) from e
    return compiled


def is_excluded(route: str, exclusions: Iterable[Pattern]) -> bool:
    return any(pattern.search(route) for pattern in exclusions)


def filter_routes(identifiers: Iterable[str], exclude_patterns: Sequence[str] = ()) -> List[str]:
    """Normalize page identifiers into the sorted list of routes to publish.

    Order matters:
      1. strip `/src/routes` and `/+page*.svelte`, normalize trailing slash;
      2. expand optional tokens, so each optional depth is its own route;
      3. drop routes matched by an exclusion pattern, tested before
         `(group)` segments are removed so anchored patterns see the
         same string the developer sees in the file tree;
      4. strip `(group)` segments.
    """
    exclusions = compile_exclusions(exclude_patterns)
    routes = [strip_route_decoration(x) for x in identifiers]
    routes = expand_optional_routes(routes)

    kept = []
    for route in routes:
        if is_excluded(route, exclusions):
            logger.debug("excluded route %s", route)
            continue
        kept.append(route)

    return sorted({strip_groups(route) for route in kept})
