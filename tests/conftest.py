"""
Shared fixtures for sitemap tests.

Route lists are injected as plain callables, so no test needs a real
`src/routes` tree except the ones exercising FileRouteEnumerator.
"""

import pytest

from core import runtime
from core.logger import ContextLogger


@pytest.fixture
def quiet_logger():
    """ContextLogger that keeps messages in memory only."""
    return ContextLogger(site="https://example.com", echo=False)


@pytest.fixture
def blog_routes():
    """`/`, `/about` and `/blog/[slug]` as page files."""
    return lambda: [
        "/src/routes/+page.svelte",
        "/src/routes/about/+page.svelte",
        "/src/routes/blog/[slug]/+page.svelte",
    ]


@pytest.fixture
def lang_routes():
    """A small multilingual site with optional params and excluded areas."""
    return lambda: [
        "/src/routes/(public)/[[lang]]/+page.svelte",
        "/src/routes/(public)/[[lang]]/about/+page.svelte",
        "/src/routes/(public)/[[lang]]/blog/[slug]/+page.svelte",
        "/src/routes/(public)/[[lang]]/blog/[page=integer]/+page.svelte",
        "/src/routes/(public)/[[lang]]/optionals/[[optional]]/+page.svelte",
        "/src/routes/(authenticated)/dashboard/+page.svelte",
        "/src/routes/(public)/terms/+page@.svelte",
    ]


@pytest.fixture
def routes_dir(tmp_path):
    """A real route tree on disk: 3 pages, 1 layout, 1 server route."""
    root = tmp_path / "src" / "routes"
    for rel in (
        "+page.svelte",
        "+layout.svelte",
        "about/+page.svelte",
        "blog/[slug]/+page@.svelte",
        "api/health/+server.ts",
    ):
        f = root / rel
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_text("<!-- page -->", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def reset_runtime():
    """Secrets are module-level state: start and end every test empty."""
    runtime.init({})
    yield
    runtime.init({})
