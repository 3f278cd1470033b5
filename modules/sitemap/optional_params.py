"""Optional route segments — expand `[[x]]` tokens into every valid route.

The router consumes optional segments left to right: `/foo/[[a]]/[[b]]`
serves `/foo`, `/foo/x` and `/foo/x/y`, never `/foo/[[b]]` alone. So a route
with N optional tokens gives N+1 routes, shortest first, plus the full route
when fixed segments follow the last optional token.
"""

from __future__ import annotations

from typing import Iterable, List

from modules.sitemap.tokens import has_optional_token


def expand_optional_params(route: str) -> List[str]:
    """Return every router-valid variant of `route`, in increasing length.

    E.g. `/foo/[[a]]/[[b]]` -> `/foo`, `/foo/[[a]]`, `/foo/[[a]]/[[b]]`.

    `[[lang]]` is not expanded here; it stays a fixed prefix. Fixed segments
    after the last optional token add the full route as a last variant:
    `/[[a]]/more` -> `/`, `/[[a]]`, `/[[a]]/more`.
    """
    segments = route.split("/")
    first = next((i for i, seg in enumerate(segments) if has_optional_token(seg)), None)
    if first is None:
        return [route]

    current = "/".join(segments[:first])
    variants = [current or "/"]
    for segment in segments[first:]:
        current = f"{current}/{segment}"
        if has_optional_token(segment):
            variants.append(current)
    if current != variants[-1]:
        variants.append(current)
    return variants


def expand_optional_routes(routes: Iterable[str]) -> List[str]:
    """Expand every route and pool the results, deduplicated, order kept."""
    expanded: List[str] = []
    seen = set()
    for route in routes:
        for variant in expand_optional_params(route):
            if variant not in seen:
                seen.add(variant)
                expanded.append(variant)
    return expanded
