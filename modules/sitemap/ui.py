"""Sitemap — Streamlit UI.

3 sections: Configuration, Génération (chemins + XML), Échantillon.
"""

from __future__ import annotations

import json
import logging

import pandas as pd
import requests
import streamlit as st

from core.logger import ContextLogger
from core.runtime import get_secret
from modules.sitemap.config import SitemapConfig
from modules.sitemap.engine import SitemapEngine
from modules.sitemap.errors import ConfigurationError
from modules.sitemap.sampled import sampled_paths
from modules.sitemap.strategies import CHANGEFREQ_VALUES

logger = logging.getLogger(__name__)

EXAMPLE_ROUTES = "\n".join([
    "/src/routes/(public)/+page.svelte",
    "/src/routes/(public)/about/+page.svelte",
    "/src/routes/(public)/blog/[slug]/+page.svelte",
    "/src/routes/(public)/blog/tag/[tag]/+page.svelte",
    "/src/routes/(authenticated)/dashboard/+page.svelte",
])
EXAMPLE_PARAM_VALUES = json.dumps(
    {"/blog/[slug]": ["hello-world", "another-post"], "/blog/tag/[tag]": ["red", "blue"]},
    indent=2,
)


def _lines(value: str) -> list:
    return [line.strip() for line in (value or "").splitlines() if line.strip()]


# =============================================================================
# MAIN RENDER
# =============================================================================

def render_sitemap_tab():
    """Main entry point for the Sitemap tab."""
    st.markdown('<h1 class="zen-title">SITEMAP</h1>', unsafe_allow_html=True)
    st.markdown(
        '<p class="zen-subtitle">Routes → chemins → sitemap.xml, sans page oubliée</p>',
        unsafe_allow_html=True,
    )

    tab_config, tab_gen, tab_sample = st.tabs(["Configuration", "Génération", "Échantillon"])

    with tab_config:
        _render_config_section()
    with tab_gen:
        _render_generation_section()
    with tab_sample:
        _render_sample_section()


# =============================================================================
# SECTION 1 : CONFIGURATION
# =============================================================================

def _render_config_section():
    st.subheader("Configuration")

    st.text_input("Origin", value=get_secret("sitemap.origin", ""), placeholder="https://example.com",
                  key="sitemap_origin")
    st.text_area(
        "Routes (une par ligne, fichiers +page.svelte ou routes)",
        value=EXAMPLE_ROUTES,
        height=160,
        key="sitemap_routes",
    )
    st.text_area(
        "Exclusions (regex, une par ligne)",
        value=".*\\(authenticated\\).*",
        height=80,
        key="sitemap_exclude",
    )
    st.text_area("paramValues (JSON)", value=EXAMPLE_PARAM_VALUES, height=160, key="sitemap_param_values")
    st.text_area("Chemins additionnels (un par ligne)", height=68, key="sitemap_additional")

    c1, c2 = st.columns(2)
    with c1:
        st.text_input("Langue par défaut", placeholder="en", key="sitemap_lang_default")
    with c2:
        st.text_input("Langues alternatives (séparées par des virgules)", placeholder="de, zh",
                      key="sitemap_lang_alternates")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.number_input("Max URLs par sitemap", 1, 50_000, 50_000, step=1000, key="sitemap_max_per_page")
    with c2:
        st.selectbox("changefreq par défaut", ["—", *CHANGEFREQ_VALUES], key="sitemap_changefreq")
    with c3:
        st.checkbox("Tri alphabétique", key="sitemap_sort_alpha")
    if st.checkbox("Priorité par défaut", key="sitemap_use_priority"):
        st.slider("Priorité", 0.0, 1.0, 0.7, 0.1, key="sitemap_priority")


def _build_config(page=None) -> SitemapConfig:
    """SitemapConfig depuis les widgets (lève ConfigurationError / ValueError)."""
    ss = st.session_state
    raw_params = (ss.get("sitemap_param_values") or "").strip()
    lang = None
    if (ss.get("sitemap_lang_default") or "").strip():
        lang = {
            "default": ss["sitemap_lang_default"].strip(),
            "alternates": [x.strip() for x in (ss.get("sitemap_lang_alternates") or "").split(",") if x.strip()],
        }
    changefreq = ss.get("sitemap_changefreq")
    return SitemapConfig(
        origin=(ss.get("sitemap_origin") or "").strip(),
        exclude_route_patterns=_lines(ss.get("sitemap_exclude")),
        param_values=json.loads(raw_params) if raw_params else {},
        additional_paths=_lines(ss.get("sitemap_additional")),
        lang=lang,
        max_per_page=int(ss.get("sitemap_max_per_page") or 50_000),
        page=page,
        sort="alpha" if ss.get("sitemap_sort_alpha") else None,
        default_changefreq=None if changefreq in (None, "—") else changefreq,
        default_priority=ss.get("sitemap_priority") if ss.get("sitemap_use_priority") else None,
    )


# =============================================================================
# SECTION 2 : GENERATION
# =============================================================================

def _render_generation_section():
    st.subheader("Génération du sitemap")

    if not st.button("Générer", type="primary", key="sitemap_generate", use_container_width=True):
        return

    log_box = st.container()
    try:
        config = _build_config()
        routes = _lines(st.session_state.get("sitemap_routes"))
        ctx_logger = ContextLogger(site=config.origin, callback=log_box.caption, echo=False)
        engine = SitemapEngine(config, lambda: routes, logger=ctx_logger)
        records = engine.build_path_records()
        result = engine.response()
    except json.JSONDecodeError as e:
        st.error(f"paramValues : JSON invalide ({e})")
        return
    except ConfigurationError as e:
        logger.warning("sitemap configuration error: %s", e)
        st.error(str(e))
        return

    stats = engine.get_stats(records)
    c1, c2, c3 = st.columns(3)
    c1.metric("URLs", stats["total"])
    c2.metric("Pages", stats["total_pages"])
    c3.metric("Avec alternates", stats["with_alternates"])

    if records:
        df = pd.DataFrame([
            {
                "path": r.path,
                "changefreq": r.changefreq,
                "priority": r.priority,
                "lastmod": r.lastmod,
                "alternates": ", ".join(f"{a.lang}: {a.path}" for a in r.alternates or ()),
            }
            for r in records
        ])
        st.dataframe(df.head(500), use_container_width=True)
        st.caption(f"Affichage limité à 500 lignes sur {len(df)} chemins.")

    st.session_state["sitemap_last_xml"] = result.body
    st.download_button(
        "Télécharger sitemap.xml",
        data=result.body,
        file_name="sitemap.xml",
        mime="application/xml",
        use_container_width=True,
    )
    with st.expander("Aperçu XML"):
        st.code(result.body[:5000], language="xml")


# =============================================================================
# SECTION 3 : SAMPLE
# =============================================================================

def _render_sample_section():
    st.subheader("Un chemin par route")
    st.caption("Routes statiques + un exemple par route paramétrée, lus depuis le dernier sitemap généré.")

    xml = st.session_state.get("sitemap_last_xml")
    if not xml:
        st.info("Générez d'abord un sitemap dans l'onglet Génération.")
        return

    routes = _lines(st.session_state.get("sitemap_routes"))
    try:
        paths = sampled_paths(xml, lambda: routes)
    except requests.RequestException as e:
        logger.warning("sitemap fetch failed: %s", e)
        st.error(f"Sous-sitemap inaccessible : {e}"[:300])
        return
    except ValueError as e:
        st.error(str(e)[:300])
        return
    st.dataframe(pd.DataFrame({"path": paths}), use_container_width=True)
