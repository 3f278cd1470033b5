"""Param values — bind caller data into parameterized routes.

Three shapes are accepted per route and classified once, when the config is
built:

    ScalarValues  ['hello-world', 'another-post']          one token only
    TupleValues   [('usa', 'new-york'), ('canada', 'toronto')]
    RecordValues  [{'values': ['usa', 'new-york'], 'lastmod': '2026-01-05',
                    'changefreq': 'weekly', 'priority': 0.8}]

Binding is positional, left to right, over every token of the route except
the language token (optional tokens included).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from modules.sitemap.errors import ConfigurationError
from modules.sitemap.models import PathRecord
from modules.sitemap.strategies import format_lastmod, validate_changefreq, validate_priority
from modules.sitemap.tokens import TOKEN_RE, bindable_tokens, has_lang_token, is_lang_token

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float)
_RECORD_KEYS = {"values", "lastmod", "changefreq", "priority"}


@dataclass(frozen=True)
class ParamRecord:
    """One set of values plus per-path metadata overrides."""
    values: Tuple[str, ...]
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[float] = None


@dataclass(frozen=True)
class ScalarValues:
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TupleValues:
    rows: Tuple[Tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class RecordValues:
    records: Tuple[ParamRecord, ...] = ()


ParamValueSource = Union[ScalarValues, TupleValues, RecordValues]


@dataclass
class BoundPaths:
    """Binder output, split on the presence of the language token."""
    with_lang: List[PathRecord] = field(default_factory=list)
    without_lang: List[PathRecord] = field(default_factory=list)


# =============================================================================
# CLASSIFICATION
# =============================================================================

def _scalar(route: str, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, _SCALAR_TYPES):
        raise ConfigurationError(
            f"Sitemap: paramValues for '{route}' contain an unsupported value: {value!r}."
        )
    return str(value)


def _record(route: str, item: Any) -> ParamRecord:
    if isinstance(item, ParamRecord):
        return item
    unknown = set(item) - _RECORD_KEYS
    if unknown:
        raise ConfigurationError(
            f"Sitemap: unknown keys {sorted(unknown)} in paramValues record for '{route}'."
        )
    if "values" not in item:
        raise ConfigurationError(f"Sitemap: paramValues record for '{route}' has no 'values'.")
    raw_values = item["values"]
    if isinstance(raw_values, (list, tuple)):
        values = tuple(_scalar(route, v) for v in raw_values)
    else:
        values = (_scalar(route, raw_values),)
    where = f"paramValues['{route}']"
    return ParamRecord(
        values=values,
        lastmod=format_lastmod(item.get("lastmod")),
        changefreq=validate_changefreq(item.get("changefreq"), where),
        priority=validate_priority(item.get("priority"), where),
    )


def parse_param_value_source(route: str, raw: Any) -> ParamValueSource:
    """Classify one paramValues entry into its tagged shape."""
    if isinstance(raw, (ScalarValues, TupleValues, RecordValues)):
        return raw
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ConfigurationError(
            f"Sitemap: paramValues for '{route}' must be a list, got {type(raw).__name__}."
        )
    items = list(raw)
    if not items:
        return ScalarValues()

    if all(isinstance(x, (Mapping, ParamRecord)) for x in items):
        return RecordValues(tuple(_record(route, x) for x in items))
    if all(isinstance(x, (list, tuple)) for x in items):
        return TupleValues(tuple(tuple(_scalar(route, v) for v in row) for row in items))
    if all(not isinstance(x, (list, tuple, Mapping, ParamRecord)) for x in items):
        return ScalarValues(tuple(_scalar(route, x) for x in items))

    raise ConfigurationError(
        f"Sitemap: paramValues for '{route}' mix several shapes. Use only strings, "
        f"only lists of strings, or only records."
    )


def parse_param_values(raw: Optional[Mapping[str, Any]]) -> Dict[str, ParamValueSource]:
    return {route: parse_param_value_source(route, value) for route, value in (raw or {}).items()}


# =============================================================================
# BINDING
# =============================================================================

def fill_route(route: str, values: Sequence[str]) -> str:
    """Replace the route's tokens left to right, the language token excepted."""
    expected = len(bindable_tokens(route))
    if len(values) != expected:
        raise ConfigurationError(
            f"Sitemap: '{route}' has {expected} param(s) but a paramValues entry "
            f"provides {len(values)}: {list(values)!r}."
        )
    remaining = iter(values)

    def _replace(match):
        token = match.group(0)
        return token if is_lang_token(token) else next(remaining)

    return TOKEN_RE.sub(_replace, route)


def bind_route(
    route: str,
    source: ParamValueSource,
    default_changefreq: Optional[str] = None,
    default_priority: Optional[float] = None,
) -> List[PathRecord]:
    """Concrete PathRecords for one route, one per scalar, tuple or record."""
    if isinstance(source, ScalarValues):
        count = len(bindable_tokens(route))
        if source.values and count != 1:
            if count == 0:
                raise ConfigurationError(
                    f"Sitemap: '{route}' has 0 params; remove its paramValues entry."
                )
            raise ConfigurationError(
                f"Sitemap: '{route}' has {count} params; its paramValues must be a list of "
                f"lists (one value per param), not a flat list."
            )
        return [
            PathRecord(fill_route(route, (v,)), default_changefreq, default_priority)
            for v in source.values
        ]
    if isinstance(source, TupleValues):
        return [
            PathRecord(fill_route(route, row), default_changefreq, default_priority)
            for row in source.rows
        ]
    return [
        PathRecord(
            path=fill_route(route, rec.values),
            changefreq=rec.changefreq or default_changefreq,
            priority=rec.priority if rec.priority is not None else default_priority,
            lastmod=rec.lastmod,
        )
        for rec in source.records
    ]


def generate_paths_with_param_values(
    routes: Sequence[str],
    param_values: Mapping[str, ParamValueSource],
    default_changefreq: Optional[str] = None,
    default_priority: Optional[float] = None,
) -> BoundPaths:
    """Bind param values into `routes` and split the result on `[[lang]]`.

    Raises ConfigurationError when a paramValues key names no route (removed,
    renamed or excluded) and when a route without paramValues still has a
    param. Either would otherwise hide pages from the sitemap.
    """
    route_set = set(routes)
    stale = [key for key in param_values if key not in route_set]
    if stale:
        raise ConfigurationError(
            "Sitemap: paramValues were provided for route(s) that do not exist within "
            f"src/routes/ or are excluded by excludeRoutePatterns: {', '.join(repr(k) for k in stale)}. "
            "Remove these properties from your paramValues."
        )

    static_routes = [route for route in routes if route not in param_values]
    unhandled = [route for route in static_routes if bindable_tokens(route)]
    if unhandled:
        raise ConfigurationError(
            "Sitemap: paramValues not provided for: "
            f"{', '.join(repr(r) for r in unhandled)}\n"
            "Update your sitemap's excludeRoutePatterns to exclude these routes OR add data "
            "for their params to the paramValues object of your sitemap config."
        )

    bound = BoundPaths()
    for route in static_routes:
        record = PathRecord(route, default_changefreq, default_priority)
        (bound.with_lang if has_lang_token(route) else bound.without_lang).append(record)

    for route, source in param_values.items():
        records = bind_route(route, source, default_changefreq, default_priority)
        logger.debug("%s -> %d path(s)", route, len(records))
        (bound.with_lang if has_lang_token(route) else bound.without_lang).extend(records)

    return bound
