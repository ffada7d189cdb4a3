"""Markdown page storage, one directory per dataset."""

import logging
from pathlib import Path

from pinkfrog.models.tool_results import CreatePageResult, GetPageResult, ListPagesResult
from pinkfrog.services import frontmatter
from pinkfrog.services.paths import content_dir, resolve_within

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".md"


def _page_file_name(name: str) -> str:
    return name if name.endswith(PAGE_SUFFIX) else f"{name}{PAGE_SUFFIX}"


def list_pages(root: Path, dataset: str) -> ListPagesResult:
    """List the ``.md`` files of *dataset*, creating its directory on first use."""
    directory = content_dir(root, dataset)
    result = ListPagesResult(directory=str(directory), data_set=dataset)

    if not directory.is_dir():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Could not create dataset directory %s: %s", directory, exc)
            return result.fail(f"Could not create dataset directory: {exc}")
        logger.info("Created dataset directory", extra={"directory": str(directory)})
        result.directory_created = True

    result.directory_exists = True
    try:
        result.pages = sorted(
            entry.name
            for entry in directory.iterdir()
            if entry.name.endswith(PAGE_SUFFIX) and entry.is_file()
        )
    except OSError as exc:
        logger.warning("Could not list dataset directory %s: %s", directory, exc)
        result.warn(f"Could not list {directory}: {exc}")
    return result


def create_page(root: Path, dataset: str, file_name: str, title: str, body: str) -> CreatePageResult:
    """Write a page with a ``title`` frontmatter block, replacing any existing file.

    Raises:
        ValueError: if *file_name*, *title* or *body* is empty.
    """
    if not file_name or not title or not body:
        raise ValueError("fileName, title, and copy are required")

    directory = content_dir(root, dataset)
    path = resolve_within(directory, _page_file_name(file_name))
    result = CreatePageResult(file_path=str(path), directory=str(directory))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(frontmatter.serialize(title, body), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write page %s: %s", path, exc)
        return result.fail(f"Could not write page: {exc}")

    logger.info("Page saved", extra={"path": str(path), "dataset": dataset})
    return result


def get_page(root: Path, dataset: str, page_name: str) -> GetPageResult:
    """Read *page_name* from *dataset* and split it into attributes and body.

    Raises:
        ValueError: if *page_name* is empty.
    """
    if not page_name:
        raise ValueError("pageName is required")

    path = resolve_within(content_dir(root, dataset), _page_file_name(page_name))
    result = GetPageResult(file_path=str(path), data_set=dataset)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read page %s: %s", path, exc)
        return result.fail(f"Could not read page '{page_name}': {exc}")

    parsed = frontmatter.parse(raw)
    result.attributes = parsed.attributes
    result.content = parsed.body
    result.raw_content = raw
    return result
