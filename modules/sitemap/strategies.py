"""Sitemap metadata rules — pure logic, no Streamlit dependency.

Validates and formats the optional per-URL metadata (changefreq, priority,
lastmod) so the same rules apply to config defaults, param records and
additional paths.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from modules.sitemap.errors import ConfigurationError

CHANGEFREQ_VALUES = (
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
)

Priority = Union[float, int, str]
Lastmod = Union[str, date, datetime]


def validate_changefreq(value: Optional[str], where: str = "defaultChangefreq") -> Optional[str]:
    """Return the changefreq unchanged, or raise if it is not a protocol value."""
    if value is None or value == "":
        return None
    if value not in CHANGEFREQ_VALUES:
        raise ConfigurationError(
            f"Sitemap: invalid changefreq {value!r} in {where}. "
            f"Expected one of: {', '.join(CHANGEFREQ_VALUES)}."
        )
    return value


def validate_priority(value: Optional[Priority], where: str = "defaultPriority") -> Optional[float]:
    """Priority must lie within 0.0–1.0."""
    if value is None or value == "":
        return None
    try:
        priority = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Sitemap: invalid priority {value!r} in {where}.") from None
    if not 0.0 <= priority <= 1.0:
        raise ConfigurationError(
            f"Sitemap: priority {value!r} in {where} must be between 0.0 and 1.0."
        )
    return priority


def format_priority(priority: Optional[float]) -> Optional[str]:
    """0.7 -> '0.7', 1 -> '1.0'."""
    if priority is None:
        return None
    return f"{float(priority):.1f}" if round(priority, 1) == priority else f"{float(priority):g}"


def format_lastmod(value: Optional[Lastmod]) -> Optional[str]:
    """W3C datetime: dates as YYYY-MM-DD, datetimes in ISO 8601, strings as given."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
