"""Tests for sitemap / sitemap index XML and metadata formatting."""

from datetime import date, datetime
from xml.etree.ElementTree import fromstring

import pytest

from modules.sitemap.errors import ConfigurationError
from modules.sitemap.models import Alternate, PathRecord
from modules.sitemap.strategies import (
    format_lastmod,
    format_priority,
    validate_changefreq,
    validate_priority,
)
from modules.sitemap.xml_generator import (
    SITEMAP_NS,
    XHTML_NS,
    generate_sitemap_index_xml,
    generate_sitemap_xml,
)

NS = {"sm": SITEMAP_NS, "xhtml": XHTML_NS}


class TestGenerateSitemapXml:
    def test_declaration_and_namespaces(self):
        xml = generate_sitemap_xml("https://example.com", [PathRecord("/")])
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<urlset ')
        assert f'xmlns="{SITEMAP_NS}"' in xml
        assert f'xmlns:xhtml="{XHTML_NS}"' in xml

    def test_urls_and_metadata(self):
        xml = generate_sitemap_xml(
            "https://example.com",
            [
                PathRecord("/", "daily", 0.7),
                PathRecord("/blog/a", lastmod="2026-01-05"),
            ],
        )
        urls = fromstring(xml).findall("sm:url", NS)
        assert len(urls) == 2

        assert urls[0].findtext("sm:loc", namespaces=NS) == "https://example.com/"
        assert urls[0].findtext("sm:changefreq", namespaces=NS) == "daily"
        assert urls[0].findtext("sm:priority", namespaces=NS) == "0.7"
        assert urls[0].find("sm:lastmod", NS) is None

        assert urls[1].findtext("sm:loc", namespaces=NS) == "https://example.com/blog/a"
        assert urls[1].findtext("sm:lastmod", namespaces=NS) == "2026-01-05"
        assert urls[1].find("sm:changefreq", NS) is None
        assert urls[1].find("sm:priority", NS) is None

    def test_zero_priority_written(self):
        xml = generate_sitemap_xml("https://example.com", [PathRecord("/", priority=0.0)])
        assert "<priority>0.0</priority>" in xml

    def test_alternates(self):
        alternates = (Alternate("en", "/about"), Alternate("de", "/de/about"))
        xml = generate_sitemap_xml(
            "https://example.com",
            [PathRecord("/about", alternates=alternates), PathRecord("/de/about", alternates=alternates)],
        )
        assert '<xhtml:link rel="alternate" hreflang="en" href="https://example.com/about" />' in xml

        for url in fromstring(xml).findall("sm:url", NS):
            links = url.findall("xhtml:link", NS)
            assert [(l.get("hreflang"), l.get("href")) for l in links] == [
                ("en", "https://example.com/about"),
                ("de", "https://example.com/de/about"),
            ]

    def test_escaping(self):
        xml = generate_sitemap_xml("https://example.com", [PathRecord("/search?a=1&b=2")])
        assert "<loc>https://example.com/search?a=1&amp;b=2</loc>" in xml

    def test_empty(self):
        root = fromstring(generate_sitemap_xml("https://example.com", []))
        assert root.tag == f"{{{SITEMAP_NS}}}urlset"
        assert list(root) == []

    def test_compact(self):
        xml = generate_sitemap_xml("https://example.com", [PathRecord("/")], pretty=False)
        assert xml.endswith("<url><loc>https://example.com/</loc></url></urlset>")


class TestGenerateSitemapIndexXml:
    def test_index(self):
        assert generate_sitemap_index_xml("https://example.com", 3) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
            "  <sitemap>\n"
            "    <loc>https://example.com/sitemap1.xml</loc>\n"
            "  </sitemap>\n"
            "  <sitemap>\n"
            "    <loc>https://example.com/sitemap2.xml</loc>\n"
            "  </sitemap>\n"
            "  <sitemap>\n"
            "    <loc>https://example.com/sitemap3.xml</loc>\n"
            "  </sitemap>\n"
            "</sitemapindex>"
        )


class TestMetadataRules:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.7, "0.7"), (1, "1.0"), (0, "0.0"), (0.75, "0.75"), (None, None)],
    )
    def test_format_priority(self, value, expected):
        assert format_priority(value) == expected

    def test_format_lastmod(self):
        assert format_lastmod(date(2026, 1, 5)) == "2026-01-05"
        assert format_lastmod(datetime(2026, 1, 5, 10, 30)) == "2026-01-05T10:30:00"
        assert format_lastmod("2026-01-05T10:30:00+01:00") == "2026-01-05T10:30:00+01:00"
        assert format_lastmod(None) is None

    def test_changefreq(self):
        assert validate_changefreq("weekly") == "weekly"
        assert validate_changefreq("") is None
        with pytest.raises(ConfigurationError, match="invalid changefreq"):
            validate_changefreq("fortnightly")

    def test_priority(self):
        assert validate_priority("0.3") == 0.3
        assert validate_priority(1) == 1.0
        with pytest.raises(ConfigurationError):
            validate_priority(1.5)
        with pytest.raises(ConfigurationError):
            validate_priority("high")
