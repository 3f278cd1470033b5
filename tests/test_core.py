"""Tests for core/runtime (settings) and core/logger (ContextLogger)."""

import json

import pytest

from core import runtime
from core import logger as logger_module
from core.logger import LOGS_BUFFER_SIZE, ContextLogger, get_logger


class TestRuntime:
    def test_get_secret_path(self):
        runtime.init({"sitemap": {"origin": "https://example.com", "lang": {"default": "en"}}})
        assert runtime.get_secret("sitemap.origin") == "https://example.com"
        assert runtime.get_secret("sitemap.lang.default") == "en"
        assert runtime.get_secret("sitemap.missing", "x") == "x"
        assert runtime.get_secret("nope.deeper") is None

    def test_secrets_from_env_defaults(self):
        assert runtime.secrets_from_env({}) == {
            "sitemap": {
                "origin": "",
                "routes_dir": "src/routes",
                "exclude_route_patterns": [],
                "additional_paths": [],
            }
        }

    def test_secrets_from_env(self, tmp_path):
        params = tmp_path / "params.json"
        params.write_text(json.dumps({"/blog/[slug]": ["a", "b"]}), encoding="utf-8")
        settings = runtime.secrets_from_env({
            "SITEMAP_ORIGIN": "https://example.com",
            "SITEMAP_ROUTES_DIR": "app/routes",
            "SITEMAP_EXCLUDE": "^/admin\n.*\\(auth\\).*\n",
            "SITEMAP_ADDITIONAL_PATHS": "/robots.txt,/humans.txt",
            "SITEMAP_MAX_PER_PAGE": "1000",
            "SITEMAP_SORT": "alpha",
            "SITEMAP_DEFAULT_CHANGEFREQ": "daily",
            "SITEMAP_DEFAULT_PRIORITY": "0.7",
            "SITEMAP_LANG_DEFAULT": "en",
            "SITEMAP_LANG_ALTERNATES": "de, zh",
            "SITEMAP_PARAM_VALUES_FILE": str(params),
        })["sitemap"]

        assert settings["routes_dir"] == "app/routes"
        assert settings["exclude_route_patterns"] == ["^/admin", ".*\\(auth\\).*"]
        assert settings["additional_paths"] == ["/robots.txt", "/humans.txt"]
        assert settings["max_per_page"] == 1000
        assert settings["sort"] == "alpha"
        assert settings["default_changefreq"] == "daily"
        assert settings["default_priority"] == 0.7
        assert settings["lang"] == {"default": "en", "alternates": ["de", "zh"]}
        assert settings["param_values"] == {"/blog/[slug]": ["a", "b"]}

    def test_exclude_keeps_regex_quantifiers(self):
        settings = runtime.secrets_from_env({"SITEMAP_EXCLUDE": "^/a{1,2}$\n^/b(,c)?$"})["sitemap"]
        assert settings["exclude_route_patterns"] == ["^/a{1,2}$", "^/b(,c)?$"]


class TestContextLogger:
    def test_context_in_messages(self):
        seen = []
        log = ContextLogger(site="https://example.com", page="2", callback=seen.append, echo=False)
        log.info("done")
        log.warning("slow")

        assert "[example.com] [page 2] done" in seen[0]
        assert "WARNING" in seen[1] and seen[1].endswith("slow")
        assert log.get_logs() == seen

    def test_debug_only_when_verbose(self):
        log = ContextLogger(echo=False)
        log.debug("hidden")
        assert log.get_logs() == []

        verbose = ContextLogger(verbose=True, echo=False)
        verbose.debug("shown")
        assert verbose.get_logs()[0].endswith("[DEBUG] shown")

    def test_buffer_bounded(self):
        log = ContextLogger(echo=False)
        for i in range(LOGS_BUFFER_SIZE + 20):
            log.info(f"m{i}")
        assert len(log.get_logs(limit=LOGS_BUFFER_SIZE * 2)) == LOGS_BUFFER_SIZE
        assert log.get_logs(limit=1)[0].endswith(f"m{LOGS_BUFFER_SIZE + 19}")

        log.clear_logs()
        assert log.get_logs() == []

    def test_echo(self, capsys):
        ContextLogger(echo=True).error("boom")
        assert "boom" in capsys.readouterr().out

    def test_child_shares_buffer(self):
        parent = ContextLogger(site="https://example.com", echo=False)
        parent.child(page="3").info("page served")
        parent.info("index served")

        first, second = parent.get_logs()
        assert "[example.com] [page 3] page served" in first
        assert "[page" not in second

    def test_get_logger_follows_site(self, monkeypatch):
        monkeypatch.setattr(logger_module, "_default_logger", None)
        first = get_logger("https://a.example")
        assert get_logger() is first
        assert get_logger("https://a.example") is first
        assert get_logger("https://b.example").site == "https://b.example"

    @pytest.mark.parametrize("site",["https://example.com/", "https://example.com"])
    def test_site_netloc(self, site):
        log = ContextLogger(site=site, echo=False)
        log.info("x")
        assert "[example.com]" in log.get_logs()[0]
