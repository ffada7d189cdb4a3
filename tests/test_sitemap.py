"""Tests for sitemap URL derivation and XML output."""

import datetime as dt
from unittest.mock import patch
from xml.etree import ElementTree

import pytest

from conftest import write
from pinkfrog.models.tool_results import ListPagesResult
from pinkfrog.services.sitemap import SITEMAP_NS, build_sitemap, join_url, page_url

_NS = {"sm": SITEMAP_NS}


def _locs(xml_text: str) -> dict:
    root = ElementTree.fromstring(xml_text)
    return {
        url.findtext("sm:loc", namespaces=_NS): url.findtext("sm:priority", namespaces=_NS)
        for url in root.findall("sm:url", _NS)
    }


class TestUrlHelpers:
    def test_page_url_uses_alias(self):
        assert page_url("about.md", "/about-us.html") == "/about-us.html"

    def test_page_url_from_file_name(self):
        assert page_url("contact.md") == "contact.html"

    @pytest.mark.parametrize(
        "base,relative,expected",
        [
            ("https://x.dev", "about.html", "https://x.dev/about.html"),
            ("https://x.dev/", "/about.html", "https://x.dev/about.html"),
            ("https://x.dev/site", "about.html", "https://x.dev/site/about.html"),
            ("https://x.dev/site/", "/about.html", "https://x.dev/site/about.html"),
            ("https://x.dev", "https://cdn.dev/page.html", "https://cdn.dev/page.html"),
        ],
    )
    def test_join_url(self, base, relative, expected):
        assert join_url(base, relative) == expected


class TestBuildSitemap:
    def test_alias_and_priority(self, site):
        write(site, "src/content/default/about.md", '---\ntitle: About\nalias: "/about.html"\n---\nAbout us')
        result = build_sitemap(site, "default", "https://example.com", today=dt.date(2024, 5, 1))

        assert result.success is True
        assert result.url_count == 2
        locs = _locs(result.xml)
        assert locs == {
            "https://example.com/about.html": "0.8",
            "https://example.com/index.html": "1.0",
        }
        assert all(entry.lastmod == "2024-05-01" for entry in result.urls)
        assert all(entry.changefreq == "weekly" for entry in result.urls)

    def test_aliased_home_page_is_not_top_priority(self, tmp_path):
        write(tmp_path, "src/content/default/home.md", "---\nalias: /index.html\n---\nhi")
        result = build_sitemap(tmp_path, "default", "https://example.com")
        assert [entry.priority for entry in result.urls] == ["0.8"]

    def test_writes_file_and_creates_dist(self, site):
        result = build_sitemap(site, "default", "https://example.com/")
        path = site / "dist/sitemap.xml"
        assert result.sitemap_path == str(path)
        text = path.read_text(encoding="utf-8")
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f'<urlset xmlns="{SITEMAP_NS}">' in text
        assert text == result.xml

    def test_lastmod_defaults_to_utc_today(self, site):
        result = build_sitemap(site, "default", "https://example.com")
        assert result.urls[0].lastmod == dt.datetime.now(dt.timezone.utc).date().isoformat()

    def test_unreadable_page_is_skipped(self, site):
        write(site, "src/content/default/broken.md", "---\ntitle: Broken\n---\nx")
        original = type(site).read_text

        def flaky(path, *args, **kwargs):
            if path.name == "broken.md":
                raise PermissionError("no access")
            return original(path, *args, **kwargs)

        with patch("pathlib.Path.read_text", flaky):
            result = build_sitemap(site, "default", "https://example.com")

        assert result.success is True
        assert result.url_count == 1
        assert result.status == "partial"
        assert any("broken.md" in w for w in result.warnings)

    def test_empty_dataset_gives_empty_urlset(self, tmp_path):
        result = build_sitemap(tmp_path, "empty", "https://example.com")
        assert result.url_count == 0
        assert _locs(result.xml) == {}

    def test_unavailable_dataset_is_reported(self, tmp_path):
        failed = ListPagesResult(directory=str(tmp_path / "src/content/locked"), data_set="locked")
        failed.fail("Could not create dataset directory: denied")
        with patch("pinkfrog.services.sitemap.list_pages", return_value=failed):
            result = build_sitemap(tmp_path, "locked", "https://example.com")

        assert result.url_count == 0
        assert result.status == "partial"
        assert "Could not create dataset directory: denied" in result.warnings

    def test_requires_base_url(self, site):
        with pytest.raises(ValueError, match="baseUrl"):
            build_sitemap(site, "default", "")
