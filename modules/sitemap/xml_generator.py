"""Sitemap XML generator — pure logic, no Streamlit dependency.

Generates standard sitemap XML (protocol 0.9) from PathRecords, with
hreflang alternates as `xhtml:link` elements.
Can be reused in a FastAPI/Flask context.
"""

from __future__ import annotations

from typing import Iterable
from xml.etree.ElementTree import Element, SubElement, indent, tostring

from modules.sitemap.models import PathRecord
from modules.sitemap.strategies import format_priority

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"
MAX_URLS_PER_SITEMAP = 50_000
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _serialize(root: Element, pretty: bool) -> str:
    if pretty:
        indent(root, space="  ")
    return XML_DECLARATION + tostring(root, encoding="unicode")


def sitemap_child_url(origin: str, page: int) -> str:
    """`https://example.com` + 2 -> `https://example.com/sitemap2.xml`."""
    return f"{origin}/sitemap{page}.xml"


def generate_sitemap_xml(origin: str, records: Iterable[PathRecord], pretty: bool = True) -> str:
    """Generate a `urlset` document.

    `origin` has no trailing slash; every record path starts with `/`.
    Empty metadata is omitted rather than written as empty elements.
    """
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)
    urlset.set("xmlns:xhtml", XHTML_NS)

    for record in records:
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = f"{origin}{record.path}"

        if record.lastmod:
            lm_el = SubElement(url_el, "lastmod")
            lm_el.text = record.lastmod

        if record.changefreq:
            cf_el = SubElement(url_el, "changefreq")
            cf_el.text = record.changefreq

        if record.priority is not None:
            pr_el = SubElement(url_el, "priority")
            pr_el.text = format_priority(record.priority)

        for alt in record.alternates or ():
            link = SubElement(url_el, "xhtml:link")
            link.set("rel", "alternate")
            link.set("hreflang", alt.lang)
            link.set("href", f"{origin}{alt.path}")

    return _serialize(urlset, pretty)


def generate_sitemap_index_xml(origin: str, total_pages: int, pretty: bool = True) -> str:
    """Generate a `sitemapindex` listing sitemap1.xml .. sitemap{total_pages}.xml."""
    sitemapindex = Element("sitemapindex")
    sitemapindex.set("xmlns", SITEMAP_NS)

    for page in range(1, total_pages + 1):
        sitemap_el = SubElement(sitemapindex, "sitemap")
        loc = SubElement(sitemap_el, "loc")
        loc.text = sitemap_child_url(origin, page)

    return _serialize(sitemapindex, pretty)
