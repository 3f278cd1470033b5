# Sitemap - Version affichée dans l'app (footer) et l'API (OpenAPI)
# À chaque release : incrémenter VERSION, mettre à jour RELEASE_NOTE et prépendre à RELEASE_HISTORY.

import datetime

VERSION = "1.2.0"
BUILD_DATE = datetime.datetime.now().strftime("%Y-%m-%d %H:%M")
RELEASE_NOTE = "Sitemap index paginé (sitemap{N}.xml), paramValues en records (lastmod/changefreq/priority), processPaths."

# Historique des notes de version (précédentes uniquement, plus récente en premier)
RELEASE_HISTORY = [
    {"version": "1.1.0", "date": "2026-08-24", "note": "Routes multilingues [[lang]] / [lang] avec alternates hreflang réciproques. Routes à paramètres optionnels [[x]]."},
    {"version": "1.0.1", "date": "2026-07-30", "note": "Erreur explicite pour les paramValues d'une route supprimée ou exclue."},
    {"version": "1.0.0", "date": "2026-07-12", "note": "Génération du sitemap depuis src/routes + paramValues. API FastAPI et aperçu Streamlit."},
]
