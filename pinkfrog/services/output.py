"""Management of the generated ``dist`` tree."""

import logging
import shutil
from pathlib import Path

from pinkfrog.models.tool_results import CopyMediaResult, EmptyDistResult, SaveHtmlResult
from pinkfrog.services.paths import dist_dir, media_destination_dir, media_source_dir, resolve_within

logger = logging.getLogger(__name__)


def save_html(root: Path, file_name: str, content: str) -> SaveHtmlResult:
    """Write *content* to ``dist/<file_name>``, creating parent directories.

    Raises:
        ValueError: if either argument is empty or *file_name* leaves ``dist``.
    """
    if not file_name or not content:
        raise ValueError("fileName and content are required")

    dist = dist_dir(root)
    path = resolve_within(dist, file_name)
    result = SaveHtmlResult(file_path=str(path), dist_dir=str(dist))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write %s: %s", path, exc)
        return result.fail(f"Could not write {file_name}: {exc}")

    logger.info("HTML saved", extra={"path": str(path), "bytes": len(content)})
    return result


def _copy_tree(source: Path, destination: Path) -> int:
    """Mirror *source* into *destination* depth-first; return the number of files copied.

    The first error propagates and stops the copy.
    """
    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for entry in sorted(source.iterdir()):
        target = destination / entry.name
        if entry.is_dir():
            copied += _copy_tree(entry, target)
        else:
            shutil.copyfile(entry, target)
            copied += 1
    return copied


def copy_media(root: Path) -> CopyMediaResult:
    """Copy ``src/media`` into ``dist/media``."""
    source = media_source_dir(root)
    destination = media_destination_dir(root)
    result = CopyMediaResult(source_dir=str(source), destination_dir=str(destination))

    if not source.is_dir():
        logger.warning("Media source directory missing: %s", source)
        return result.fail(f"Media source directory does not exist: {source}")

    try:
        result.files_copied = _copy_tree(source, destination)
    except OSError as exc:
        logger.error("Media copy aborted: %s", exc)
        return result.fail(f"Media copy failed: {exc}")

    logger.info("Media copied", extra={"files": result.files_copied, "destination": str(destination)})
    return result


def _remove_children(directory: Path, result: EmptyDistResult) -> None:
    """Delete everything below *directory*, post-order.

    A subtree that cannot be listed or removed is recorded as a warning and
    skipped; its siblings are still processed.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning("Could not list %s: %s", directory, exc)
        result.warn(f"Could not list {directory}: {exc}")
        return

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                _remove_children(entry, result)
                entry.rmdir()
            else:
                entry.unlink()
            result.removed += 1
        except FileNotFoundError:
            logger.debug("%s vanished before removal", entry)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", entry, exc)
            result.warn(f"Could not remove {entry}: {exc}")


def empty_dist(root: Path) -> EmptyDistResult:
    """Remove every file and directory inside ``dist`` and leave ``dist`` in place.

    Failures inside a subtree do not stop the rest of the clean-up; they are
    reported as warnings on an otherwise successful result.
    """
    dist = dist_dir(root)
    result = EmptyDistResult(dist_dir=str(dist))

    if dist.is_dir():
        _remove_children(dist, result)

    try:
        dist.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Could not recreate %s: %s", dist, exc)
        return result.fail(f"Could not recreate dist directory: {exc}")

    logger.info("dist emptied", extra={"removed": result.removed, "warnings": len(result.warnings)})
    return result
