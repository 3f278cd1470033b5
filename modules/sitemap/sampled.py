"""Sampled URLs — one URL per route, read back from a generated sitemap.

Meant for test fixtures and SEO checks (e.g. "render one page of every
template"), not for production traffic. Consumes the sitemap XML directly so
param values and exclusion rules never need to be duplicated.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import urlparse
from xml.etree.ElementTree import ParseError, fromstring

import requests

from modules.sitemap.routes import FileRouteEnumerator, RouteEnumerator, filter_routes
from modules.sitemap.tokens import REQUIRED_LANG_TOKEN_RE, TOKEN_RE, route_to_regex, strip_lang_token

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30

Fetch = Callable[[str], str]


def fetch_sitemap(url: str) -> str:
    """GET a child sitemap listed in a sitemap index."""
    r = requests.get(url, timeout=REQUEST_TIMEOUT)
    r.raise_for_status()
    return r.text


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_sitemap_locs(xml_text: str) -> Tuple[str, List[str]]:
    """Return the root kind (`urlset` / `sitemapindex`) and every `<loc>`."""
    try:
        root = fromstring(xml_text.strip())
    except ParseError as e:
        raise ValueError(f"Sitemap XML could not be parsed: {e}") from e
    kind = _local_name(root.tag)
    if kind not in ("urlset", "sitemapindex"):
        raise ValueError(f"Not a sitemap document: <{kind}>")
    locs = [
        (el.text or "").strip()
        for el in root.iter()
        if _local_name(el.tag) == "loc" and (el.text or "").strip()
    ]
    return kind, locs


def find_first_matches(patterns: Iterable[str], haystack: List[str]) -> List[str]:
    """First string of `haystack` matching each pattern, in pattern order.

    E.g. patterns ("a.*", "b.*") over ["apple", "banana", "cherry"] ->
    ["apple", "banana"].
    """
    matches: List[str] = []
    for pattern in patterns:
        regex = re.compile(pattern)
        for needle in haystack:
            if regex.search(needle):
                if needle not in matches:
                    matches.append(needle)
                break
    return matches


def _sample_route(route: str) -> str:
    # The default language has no code under [[lang]]; [lang] stays a param.
    return route if REQUIRED_LANG_TOKEN_RE.search(route) else strip_lang_token(route)


def sampled_urls(
    xml_text: str,
    route_enumerator: Optional[RouteEnumerator] = None,
    fetch: Optional[Fetch] = None,
) -> List[str]:
    """URL of every static route, plus one URL per parameterized route, sorted.

    A sitemap index is followed: each child sitemap is fetched (with
    `requests`, or the given `fetch`) and their URLs combined.
    """
    kind, locs = parse_sitemap_locs(xml_text)
    if kind == "sitemapindex":
        fetch = fetch or fetch_sitemap
        urls: List[str] = []
        for child_url in locs:
            urls.extend(parse_sitemap_locs(fetch(child_url))[1])
    else:
        urls = locs
    if not urls:
        return []

    # Exclusions were applied when the sitemap was generated.
    routes = filter_routes((route_enumerator or FileRouteEnumerator())(), [])
    routes = list(dict.fromkeys(_sample_route(r) for r in routes))
    static_routes = [r for r in routes if not TOKEN_RE.search(r)]
    dynamic_routes = [r for r in routes if TOKEN_RE.search(r)]

    parsed = urlparse(urls[0])
    origin = f"{parsed.scheme}://{parsed.netloc}"
    url_set = set(urls)

    # Static URLs are removed before sampling, so `/about` is never picked as
    # the sample of `/[foo]`.
    static_urls = {origin + r for r in static_routes}
    sampled_static = [u for u in static_urls if u in url_set]
    dynamic_urls = [u for u in urls if u not in static_urls]

    patterns = dict.fromkeys(f"^{re.escape(origin)}{route_to_regex(r)}$" for r in dynamic_routes)
    sampled_dynamic = find_first_matches(patterns, dynamic_urls)
    logger.debug(
        "sampled %d static + %d dynamic URL(s) from %d", len(sampled_static), len(sampled_dynamic), len(urls)
    )
    return sorted({*sampled_static, *sampled_dynamic})


def sampled_paths(
    xml_text: str,
    route_enumerator: Optional[RouteEnumerator] = None,
    fetch: Optional[Fetch] = None,
) -> List[str]:
    """Same as sampled_urls(), as paths (`/blog/hello-world`)."""
    return [urlparse(url).path or "/" for url in sampled_urls(xml_text, route_enumerator, fetch)]
