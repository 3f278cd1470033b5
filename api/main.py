# =============================================================================
# SITEMAP API - FastAPI
# Expose le moteur de sitemap (modules/sitemap) sans Streamlit
# =============================================================================

import asyncio
from typing import Any, Callable, Dict, List, Optional

import requests
from fastapi import FastAPI, HTTPException, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from core.logger import get_logger, log_error
from core.runtime import get_secret, get_secrets, init, secrets_from_env
from modules.sitemap import (
    ConfigurationError,
    FileRouteEnumerator,
    SitemapConfig,
    SitemapEngine,
    generate_sitemap_response,
    sampled_paths,
)
from version import VERSION

app = FastAPI(title="Sitemap API", version=VERSION)

# Param values loaded at request time, e.g. slugs from a database.
# Key: route (`/blog/[slug]`), value: callable returning the values.
PARAM_VALUE_PROVIDERS: Dict[str, Callable[[], list]] = {}


def param_values_provider(route: str):
    """Décorateur : enregistre la source de valeurs d'une route paramétrée."""
    def _register(fn: Callable[[], list]):
        PARAM_VALUE_PROVIDERS[route] = fn
        return fn
    return _register


def _settings() -> dict:
    if not get_secrets():
        init(secrets_from_env())
    return dict(get_secret("sitemap", {}) or {})


async def _collect_param_values() -> dict:
    """Fan-out sur toutes les sources, puis join (une seule erreur fait échouer)."""
    routes = list(PARAM_VALUE_PROVIDERS)
    results = await asyncio.gather(*(run_in_threadpool(PARAM_VALUE_PROVIDERS[r]) for r in routes))
    return dict(zip(routes, results))


# =============================================================================
# SCHEMAS
# =============================================================================
class SitemapPreviewRequest(BaseModel):
    routes: List[str]
    origin: str
    exclude_route_patterns: List[str] = []
    param_values: Dict[str, List[Any]] = {}
    additional_paths: List[str] = []
    lang: Optional[Dict[str, Any]] = None
    max_per_page: Optional[int] = None
    sort: Optional[str] = None
    default_changefreq: Optional[str] = None
    default_priority: Optional[float] = None


class SampledRequest(BaseModel):
    routes: List[str]
    sitemap_xml: str


# =============================================================================
# ROUTES
# =============================================================================
async def _sitemap_response(page: Optional[str]) -> Response:
    settings = _settings()
    routes_dir = settings.pop("routes_dir", "src/routes")

    try:
        loaded = await _collect_param_values()
    except Exception as e:
        log_error(f"Could not load paths: {e}")
        raise HTTPException(status_code=500, detail="Could not load paths")

    try:
        config = SitemapConfig.from_dict({
            **settings,
            "param_values": {**settings.get("param_values", {}), **loaded},
            "page": page,
        })
        result = generate_sitemap_response(
            config, FileRouteEnumerator(routes_dir), get_logger(config.origin).child(page)
        )
    except ConfigurationError as e:
        log_error(str(e))
        raise HTTPException(status_code=500, detail=str(e))

    return Response(content=result.body, status_code=result.status, headers=result.headers)


@app.get("/sitemap.xml")
async def sitemap_index():
    """Sitemap complet, ou index de sitemaps si le nombre d'URLs dépasse max_per_page."""
    return await _sitemap_response(None)


@app.get("/sitemap{page}.xml")
async def sitemap_page(page: str):
    """Sous-sitemap N d'un index (400 si page invalide, 404 si hors limites)."""
    return await _sitemap_response(page)


@app.post("/sitemap/preview")
def sitemap_preview(payload: SitemapPreviewRequest):
    """
    Calcule la liste des chemins pour une liste de routes fournie (sans fichiers).
    Retourne les chemins, leurs alternates et les statistiques.
    """
    data = payload.model_dump(exclude={"routes"}, exclude_none=True)
    try:
        config = SitemapConfig.from_dict(data)
        engine = SitemapEngine(config, lambda: list(payload.routes), logger=get_logger(config.origin))
        records = engine.build_path_records()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "paths": [
            {
                "path": r.path,
                "changefreq": r.changefreq,
                "priority": r.priority,
                "lastmod": r.lastmod,
                "alternates": [{"lang": a.lang, "path": a.path} for a in r.alternates or ()],
            }
            for r in records
        ],
        "stats": engine.get_stats(records),
    }


def _refuse_index(url: str) -> str:
    # Le document est fourni par l'appelant : ne pas suivre ses <loc>.
    raise ValueError("Sitemap index not supported: post a urlset document")


@app.post("/sitemap/sampled")
def sitemap_sampled(payload: SampledRequest):
    """Un chemin par route (routes statiques + un exemple par route paramétrée)."""
    try:
        return {
            "paths": sampled_paths(payload.sitemap_xml, lambda: list(payload.routes), fetch=_refuse_index)
        }
    except requests.RequestException as e:
        log_error(f"Could not fetch sitemap: {e}")
        raise HTTPException(status_code=502, detail="Could not fetch sitemap")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health")
def health():
    """Health check."""
    return {"status": "ok"}
