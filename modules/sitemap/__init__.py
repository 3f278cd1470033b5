"""Sitemap module — route-driven sitemap generation.

Pure logic is exported eagerly; the Streamlit tab is imported lazily so the
API never loads Streamlit.
"""

from .config import SitemapConfig
from .engine import SitemapEngine, generate_sitemap_response
from .errors import ConfigurationError, PageRequestError
from .models import Alternate, LanguageConfig, PathRecord, SitemapResponse
from .param_values import ParamRecord
from .routes import FileRouteEnumerator
from .sampled import sampled_paths, sampled_urls


def render_sitemap_tab(*args, **kwargs):
    from modules.sitemap.ui import render_sitemap_tab as _fn
    return _fn(*args, **kwargs)


__all__ = [
    "Alternate",
    "ConfigurationError",
    "FileRouteEnumerator",
    "LanguageConfig",
    "PageRequestError",
    "ParamRecord",
    "PathRecord",
    "SitemapConfig",
    "SitemapEngine",
    "SitemapResponse",
    "generate_sitemap_response",
    "render_sitemap_tab",
    "sampled_paths",
    "sampled_urls",
]
