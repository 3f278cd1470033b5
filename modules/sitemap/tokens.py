"""Route token helpers.

A route token is a bracketed placeholder in a route pattern:
`[slug]` (required), `[[page]]` (optional), `[page=integer]` (with a param
matcher). `lang` is reserved: `[lang]`, `[[lang]]`, `[lang=lang]` and
`[[lang=lang]]` are expanded per configured language instead of being bound
to param values.
"""

from __future__ import annotations

import re
from typing import List

# Optional alternative first so `[[x]]` is never read as `[` + `[x]` + `]`.
TOKEN_RE = re.compile(r"\[\[[^\[\]]+\]\]|\[[^\[\]]+\]")
OPTIONAL_TOKEN_RE = re.compile(r"\[\[[^\[\]]+\]\]")
LANG_TOKEN_RE = re.compile(r"/?\[(?:\[lang(?:=[a-z]+)?\]|lang(?:=[a-z]+)?)\]")
REQUIRED_LANG_TOKEN_RE = re.compile(r"(?<!\[)\[lang(?:=[a-z]+)?\](?!\])")
_LANG_NAME_RE = re.compile(r"\[\[?lang(?:=[a-z]+)?\]\]?")


def is_lang_token(token: str) -> bool:
    return bool(_LANG_NAME_RE.fullmatch(token))


def bindable_tokens(route: str) -> List[str]:
    """Tokens that must receive a param value, left to right (lang excluded)."""
    return [m.group(0) for m in TOKEN_RE.finditer(route) if not is_lang_token(m.group(0))]


def has_bindable_tokens(route: str) -> bool:
    return bool(bindable_tokens(route))


def has_lang_token(route: str) -> bool:
    return bool(LANG_TOKEN_RE.search(route))


def has_optional_token(segment: str) -> bool:
    """True if the segment carries an optional token other than `[[lang]]`."""
    return any(not is_lang_token(m.group(0)) for m in OPTIONAL_TOKEN_RE.finditer(segment))


def strip_lang_token(route: str) -> str:
    """`/[[lang]]/about` -> `/about`, `/[[lang]]` -> `/`."""
    return LANG_TOKEN_RE.sub("", route, count=1) or "/"


def route_to_regex(route: str) -> str:
    """`/blog/[slug].png` -> `/blog/[^/]+\\.png` (literal parts escaped)."""
    parts = []
    last = 0
    for m in TOKEN_RE.finditer(route):
        parts.append(re.escape(route[last:m.start()]))
        parts.append("[^/]+")
        last = m.end()
    parts.append(re.escape(route[last:]))
    return "".join(parts)
