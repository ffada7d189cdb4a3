"""Tests for reading templates, markdown renderers and components of a decoration."""

import pytest

from conftest import write
from pinkfrog.services.decoration import get_component, get_markdown_renderers, get_template, list_components


class TestMarkdownRenderers:
    def test_reads_html_snippets(self, site):
        write(site, "src/decoration/light/markdown/README.txt", "ignored")
        result = get_markdown_renderers(site)
        assert result.decoration == "light"
        assert set(result.templates) == {"h1.html", "p.html"}
        assert result.templates["h1.html"] == '<h1 class="light-title">{{content}}</h1>'

    def test_missing_directory_gives_empty_mapping(self, tmp_path):
        result = get_markdown_renderers(tmp_path)
        assert result.success is True
        assert result.templates == {}
        assert result.status == "partial"

    def test_follows_active_decoration(self, site):
        write(site, "src/decoration/dark/markdown/h2.html", "<h2 class='dark'>{{content}}</h2>")
        write(site, "src/settings.yml", "decoration: dark\n")
        result = get_markdown_renderers(site)
        assert result.decoration == "dark"
        assert list(result.templates) == ["h2.html"]


class TestGetTemplate:
    def test_default_template(self, site):
        result = get_template(site)
        assert result.template_exists is True
        assert "{{content}}" in result.template

    def test_missing_template(self, site):
        result = get_template(site, "post.html")
        assert result.template_exists is False
        assert result.template is None
        assert result.success is True

    def test_template_name_cannot_escape(self, site):
        with pytest.raises(ValueError):
            get_template(site, "../../../settings.yml")


class TestGetComponent:
    def test_full_component(self, site):
        result = get_component(site, "card")
        assert result.component_exists is True
        assert result.template == '<div class="card">{{content}}</div>'
        assert result.example_md == ":::card\nHello\n:::"
        assert result.example_html == '<div class="card">Hello</div>'

    def test_missing_example_html_is_isolated(self, site):
        (site / "src/decoration/light/components/card/example.html").unlink()
        result = get_component(site, "card")
        assert result.component_exists is True
        assert result.example_html is None
        assert result.template is not None
        assert result.example_md is not None

    def test_missing_component(self, site):
        result = get_component(site, "hero")
        assert result.component_exists is False
        assert result.template is None
        assert result.example_md is None
        assert result.example_html is None

    def test_empty_directory_still_exists(self, site):
        (site / "src/decoration/light/components/empty").mkdir()
        result = get_component(site, "empty")
        assert result.component_exists is True
        assert result.template is None

    def test_requires_name(self, site):
        with pytest.raises(ValueError):
            get_component(site, "")


class TestListComponents:
    def test_lists_directories(self, site):
        (site / "src/decoration/light/components/hero").mkdir()
        write(site, "src/decoration/light/components/stray.html", "x")
        assert list_components(site).components == ["card", "hero"]

    def test_missing_directory(self, tmp_path):
        result = list_components(tmp_path)
        assert result.components == []
        assert result.warnings
