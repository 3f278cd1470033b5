"""
Runtime context (agnostique UI).
Permet à core/ et modules/ de fonctionner sans Streamlit.
L'app Streamlit appelle init() avec st.secrets ; l'API appelle init() avec
secrets_from_env().
"""

import json
import os

ENV_PREFIX = "SITEMAP_"

_secrets: dict = {}


def init(secrets: dict = None):
    """Injecte les secrets / réglages (appelé par app.py ou api)."""
    global _secrets
    _secrets = secrets or {}


def get_secrets() -> dict:
    return _secrets


def get_secret(path: str, default=None):
    """Récupère un secret par chemin (ex: 'sitemap.origin' ou 'sitemap.lang.default')."""
    keys = path.replace("[", ".").replace("]", "").split(".")
    val = _secrets
    for k in keys:
        val = val.get(k, default) if isinstance(val, dict) else default
        if val is default:
            return default
    return val


def _split(value: str, sep: str = ",") -> list:
    return [v.strip() for v in value.split(sep) if v.strip()]


def secrets_from_env(environ=None) -> dict:
    """
    Construit le dict de secrets depuis les variables SITEMAP_* :
    SITEMAP_ORIGIN, SITEMAP_ROUTES_DIR, SITEMAP_EXCLUDE (une regex par ligne, une
    virgule peut faire partie d'une regex), SITEMAP_ADDITIONAL_PATHS (séparés
    par des virgules), SITEMAP_MAX_PER_PAGE, SITEMAP_SORT,
    SITEMAP_DEFAULT_CHANGEFREQ, SITEMAP_DEFAULT_PRIORITY, SITEMAP_LANG_DEFAULT,
    SITEMAP_LANG_ALTERNATES, SITEMAP_PARAM_VALUES_FILE (JSON).
    """
    env = os.environ if environ is None else environ

    def get(name, default=None):
        return env.get(ENV_PREFIX + name, default)

    sitemap = {
        "origin": get("ORIGIN", ""),
        "routes_dir": get("ROUTES_DIR", "src/routes"),
        "exclude_route_patterns": _split(get("EXCLUDE", ""), "\n"),
        "additional_paths": _split(get("ADDITIONAL_PATHS", "")),
    }
    if get("MAX_PER_PAGE"):
        sitemap["max_per_page"] = int(get("MAX_PER_PAGE"))
    if get("SORT"):
        sitemap["sort"] = get("SORT")
    if get("DEFAULT_CHANGEFREQ"):
        sitemap["default_changefreq"] = get("DEFAULT_CHANGEFREQ")
    if get("DEFAULT_PRIORITY"):
        sitemap["default_priority"] = float(get("DEFAULT_PRIORITY"))
    if get("LANG_DEFAULT"):
        sitemap["lang"] = {
            "default": get("LANG_DEFAULT"),
            "alternates": _split(get("LANG_ALTERNATES", "")),
        }

    param_file = get("PARAM_VALUES_FILE")
    if param_file:
        with open(param_file, encoding="utf-8") as f:
            sitemap["param_values"] = json.load(f)

    return {"sitemap": sitemap}
