"""Tests for rendering content pages through a decoration."""

from conftest import write
from pinkfrog.services.renderer import apply_renderers, render_page, substitute


class TestSubstitute:
    def test_replaces_placeholders(self):
        assert substitute("<b>{{title}}</b>", {"title": "Hi"}) == "<b>Hi</b>"

    def test_content_is_substituted_last(self):
        out = substitute("{{content}}|{{title}}", {"content": "{{title}}", "title": "T"})
        assert out == "{{title}}|T"

    def test_unknown_placeholders_are_left_alone(self):
        assert substitute("{{missing}}", {"title": "x"}) == "{{missing}}"


class TestApplyRenderers:
    def test_wraps_matching_tags(self):
        html = apply_renderers("<h1>Hello</h1><p>Text</p>", {"h1.html": '<h1 class="big">{{content}}</h1>'})
        assert html == '<h1 class="big">Hello</h1><p>Text</p>'

    def test_nested_tags_are_rendered_inside_out(self):
        html = apply_renderers(
            "<ul><li>a</li><li>b</li></ul>",
            {"ul.html": '<ul class="list">{{content}}</ul>', "li.html": '<li class="item">{{content}}</li>'},
        )
        assert html == '<ul class="list"><li class="item">a</li><li class="item">b</li></ul>'

    def test_no_renderers_returns_input(self):
        assert apply_renderers("<p>x</p>", {}) == "<p>x</p>"


class TestRenderPage:
    def test_renders_home_page(self, site):
        result = render_page(site, "default", "index.md")
        html = (site / "dist/index.html").read_text(encoding="utf-8")

        assert result.success is True
        assert result.status == "ok"
        assert result.file_path == str(site / "dist/index.html")
        assert "<title>Home</title>" in html
        assert '<h1 class="light-title">Welcome</h1>' in html

    def test_alias_sets_output_path(self, site):
        write(site, "src/content/default/about.md", "---\ntitle: About\nalias: /team/about.html\n---\nWe build things.")
        result = render_page(site, "default", "about")
        path = site / "dist/team/about.html"
        assert result.file_path == str(path)
        assert '<p class="light-copy">We build things.</p>' in path.read_text(encoding="utf-8")

    def test_explicit_file_name(self, site):
        result = render_page(site, "default", "index.md", file_name="preview/home.html")
        assert result.file_path == str(site / "dist/preview/home.html")

    def test_missing_template_writes_body_only(self, site):
        result = render_page(site, "default", "index.md", template="post.html")
        html = (site / "dist/index.html").read_text(encoding="utf-8")
        assert result.success is True
        assert result.status == "partial"
        assert html == '<h1 class="light-title">Welcome</h1>'

    def test_missing_page_fails(self, site):
        result = render_page(site, "default", "ghost.md")
        assert result.success is False
        assert result.file_path is None
