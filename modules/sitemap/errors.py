"""Sitemap errors — shared by the engine, the API and the Streamlit UI."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Fatal sitemap configuration problem.

    Raised before any output is produced: a route that cannot be resolved,
    param values for a route that does not exist, a missing origin, etc.
    There is no partial-success mode.
    """


class PageRequestError(Exception):
    """Invalid `page` on a sitemap-index sub-request (400 or 404)."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message
