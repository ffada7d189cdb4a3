"""Canonical locations inside a site root.

Nothing here touches the disk; callers decide what a missing path means.
"""

from pathlib import Path


def settings_file(root: Path) -> Path:
    return root / "src" / "settings.yml"


def content_dir(root: Path, dataset: str) -> Path:
    return resolve_within(root / "src" / "content", dataset)


def decoration_dir(root: Path, decoration: str) -> Path:
    return resolve_within(root / "src" / "decoration", decoration)


def templates_dir(root: Path, decoration: str) -> Path:
    return decoration_dir(root, decoration) / "templates"


def markdown_dir(root: Path, decoration: str) -> Path:
    return decoration_dir(root, decoration) / "markdown"


def components_dir(root: Path, decoration: str) -> Path:
    return decoration_dir(root, decoration) / "components"


def component_dir(root: Path, decoration: str, component: str) -> Path:
    return resolve_within(components_dir(root, decoration), component)


def media_source_dir(root: Path) -> Path:
    return root / "src" / "media"


def dist_dir(root: Path) -> Path:
    return root / "dist"


def media_destination_dir(root: Path) -> Path:
    return dist_dir(root) / "media"


def resolve_within(base: Path, relative: str) -> Path:
    """Join *relative* onto *base*, refusing results outside *base*.

    Raises:
        ValueError: if *relative* is absolute or climbs out of *base*.
    """
    candidate = (base / relative).resolve()
    if candidate != base.resolve() and base.resolve() not in candidate.parents:
        raise ValueError(f"Path '{relative}' points outside {base}.")
    return base / relative
