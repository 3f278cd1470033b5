"""
Sitemap - Streamlit preview
Routes → chemins → sitemap.xml
"""

import streamlit as st

from version import BUILD_DATE, VERSION
from core.runtime import init as core_init

# =============================================================================
# CONFIGURATION
# =============================================================================
st.set_page_config(
    page_title="Sitemap",
    layout="wide",
    initial_sidebar_state="collapsed",
)

try:
    core_init(dict(st.secrets))
except FileNotFoundError:
    core_init({})


# =============================================================================
# LAZY LOADING MODULE RENDERERS
# =============================================================================
def get_render_sitemap_tab():
    from modules.sitemap import render_sitemap_tab
    return render_sitemap_tab


# =============================================================================
# MAIN
# =============================================================================
get_render_sitemap_tab()()

st.markdown("---")
st.caption(f"v{VERSION} · build {BUILD_DATE}")
