"""Turn a content page into a finished HTML file using the active decoration."""

import logging
from pathlib import Path
from typing import Dict, Optional

import markdown
from bs4 import BeautifulSoup

from pinkfrog.models.tool_results import RenderPageResult
from pinkfrog.services.content import get_page
from pinkfrog.services.decoration import get_markdown_renderers, get_template
from pinkfrog.services.output import save_html
from pinkfrog.services.sitemap import page_url

logger = logging.getLogger(__name__)

_MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]
_LATE_KEYS = ("content",)


def substitute(text: str, context: Dict[str, str]) -> str:
    """Replace ``{{key}}`` placeholders literally; ``content`` goes last."""
    output = text
    for key, value in context.items():
        if key not in _LATE_KEYS:
            output = output.replace(f"{{{{{key}}}}}", value)
    for key in _LATE_KEYS:
        if key in context:
            output = output.replace(f"{{{{{key}}}}}", context[key])
    return output


def apply_renderers(html: str, renderers: Dict[str, str]) -> str:
    """Swap each element that has a ``<tag>.html`` renderer for that snippet.

    Elements are visited innermost first so a renderer for ``li`` is applied
    before the one for ``ul`` wraps it.
    """
    by_tag = {name[: -len(".html")]: snippet for name, snippet in renderers.items() if name.endswith(".html")}
    if not by_tag:
        return html

    soup = BeautifulSoup(html, "html.parser")
    for element in reversed(soup.find_all(list(by_tag))):
        replacement = substitute(by_tag[element.name], {"content": element.decode_contents()})
        for node in list(BeautifulSoup(replacement, "html.parser").contents):
            element.insert_before(node.extract())
        element.decompose()

    return str(soup)


def render_page(
    root: Path,
    dataset: str,
    page_name: str,
    template: str = "index.html",
    file_name: Optional[str] = None,
) -> RenderPageResult:
    """Render *page_name* through the decoration and save it under ``dist``.

    Raises:
        ValueError: if *page_name* is empty or the output path leaves ``dist``.
    """
    page = get_page(root, dataset, page_name)
    result = RenderPageResult(template=template, page_name=page_name)
    if not page.success:
        return result.fail(page.message or f"Page '{page_name}' could not be read")

    body_html = markdown.markdown(page.content or "", extensions=_MARKDOWN_EXTENSIONS)
    renderers = get_markdown_renderers(root)
    for warning in renderers.warnings:
        result.warn(warning)
    body_html = apply_renderers(body_html, renderers.templates)

    layout = get_template(root, template)
    if layout.template_exists and layout.template is not None:
        context = {"title": ""}
        context.update(page.attributes)
        context["content"] = body_html
        html = substitute(layout.template, context)
    else:
        logger.warning("Template %s missing; writing page body only", template)
        result.warn(f"Template '{template}' not found in decoration {layout.decoration}")
        html = body_html

    name = page_name if page_name.endswith(".md") else f"{page_name}.md"
    target = file_name or page_url(name, page.attributes.get("alias")).lstrip("/")
    saved = save_html(root, target, html)
    result.file_path = saved.file_path
    if not saved.success:
        return result.fail(saved.message or "Could not save rendered page")

    logger.info("Page rendered", extra={"page": page_name, "path": saved.file_path})
    return result
