"""Read-only access to the active decoration: templates, markdown renderers, components."""

import logging
from pathlib import Path
from typing import Dict, Optional

from pinkfrog.models.tool_results import (
    ComponentListResult,
    ComponentResult,
    MarkdownRenderersResult,
    TemplateResult,
)
from pinkfrog.services.paths import component_dir, components_dir, markdown_dir, resolve_within, templates_dir
from pinkfrog.services.site_settings import get_decoration

logger = logging.getLogger(__name__)

COMPONENT_FILES = ("template.html", "example.md", "example.html")


def _read_optional(path: Path) -> Optional[str]:
    """Return the text of *path*, or *None* when it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable decoration file %s: %s", path, exc)
        return None


def get_markdown_renderers(root: Path) -> MarkdownRenderersResult:
    """Collect every ``<tag>.html`` snippet of the active decoration."""
    decoration = get_decoration(root)
    directory = markdown_dir(root, decoration)
    result = MarkdownRenderersResult(decoration=decoration, markdown_dir=str(directory))

    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Markdown renderer directory unavailable: %s", exc)
        return result.warn(f"Markdown directory not found: {directory}")

    renderers: Dict[str, str] = {}
    for entry in entries:
        if entry.suffix != ".html" or not entry.is_file():
            continue
        snippet = _read_optional(entry)
        if snippet is None:
            result.warn(f"Could not read renderer {entry.name}")
            continue
        renderers[entry.name] = snippet

    result.templates = renderers
    return result


def get_template(root: Path, name: str = "index.html") -> TemplateResult:
    """Load the template *name* from the active decoration if it exists."""
    decoration = get_decoration(root)
    name = name or "index.html"
    directory = templates_dir(root, decoration)
    path = resolve_within(directory, name)
    result = TemplateResult(decoration=decoration, template_path=str(path))

    if not path.is_file():
        logger.info("Template %s not found in decoration %s", name, decoration)
        return result

    content = _read_optional(path)
    if content is not None:
        result.template_exists = True
        result.template = content
    return result


def get_component(root: Path, name: str) -> ComponentResult:
    """Load a component's template and usage examples.

    Each file is read on its own, so a missing ``example.html`` still returns
    the template and markdown example.

    Raises:
        ValueError: if *name* is empty.
    """
    if not name:
        raise ValueError("component is required")

    decoration = get_decoration(root)
    directory = component_dir(root, decoration, name)
    template, example_md, example_html = (_read_optional(directory / f) for f in COMPONENT_FILES)

    return ComponentResult(
        decoration=decoration,
        component=name,
        component_dir=str(directory),
        component_exists=directory.is_dir(),
        template=template,
        example_md=example_md,
        example_html=example_html,
    )


def list_components(root: Path) -> ComponentListResult:
    decoration = get_decoration(root)
    directory = components_dir(root, decoration)
    result = ComponentListResult(decoration=decoration, components_dir=str(directory))

    try:
        result.components = sorted(entry.name for entry in directory.iterdir() if entry.is_dir())
    except OSError as exc:
        logger.warning("Components directory unavailable: %s", exc)
        result.warn(f"Components directory not found: {directory}")
    return result
