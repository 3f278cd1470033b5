"""Language expansion — one sitemap entry per configured language.

Every language variant of a page carries the same `alternates` tuple
(default first), which becomes the page's `xhtml:link` hreflang set:
https://developers.google.com/search/blog/2012/05/multilingual-and-multinational-site
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional, Sequence

from modules.sitemap.errors import ConfigurationError
from modules.sitemap.models import Alternate, LanguageConfig, PathRecord
from modules.sitemap.tokens import LANG_TOKEN_RE, REQUIRED_LANG_TOKEN_RE


def lang_variants(path: str, lang: LanguageConfig) -> List[Alternate]:
    """Resolved path of `path` for every configured language.

    - `[[lang]]` (optional): the default language is served without a code,
      `/[[lang]]/about` -> `/about`, `/de/about`.
    - `[lang]` (required): every language shows its code, default included,
      `/[lang]/about` -> `/en/about`, `/de/about`.
    """
    if REQUIRED_LANG_TOKEN_RE.search(path):
        default_path = LANG_TOKEN_RE.sub(f"/{lang.default}", path, count=1)
    else:
        default_path = LANG_TOKEN_RE.sub("", path, count=1) or "/"
    variants = [Alternate(lang.default, default_path)]
    for code in lang.alternates:
        variants.append(Alternate(code, LANG_TOKEN_RE.sub(f"/{code}", path, count=1)))
    return variants


def process_paths_with_lang(
    records: Sequence[PathRecord], lang: Optional[LanguageConfig]
) -> List[PathRecord]:
    if not records:
        return []
    if lang is None:
        raise ConfigurationError(
            "Sitemap: must specify the `lang` property within the sitemap config because "
            "one or more routes contain [[lang]] or [lang]."
        )

    expanded: List[PathRecord] = []
    for record in records:
        alternates = tuple(lang_variants(record.path, lang))
        expanded.extend(
            dataclasses.replace(record, path=alt.path, alternates=alternates)
            for alt in alternates
        )
    return expanded
