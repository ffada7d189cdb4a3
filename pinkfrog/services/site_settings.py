"""Active decoration lookup from ``src/settings.yml``."""

import logging
from pathlib import Path

from pinkfrog.services.paths import decoration_dir, settings_file

logger = logging.getLogger(__name__)

DEFAULT_DECORATION = "light"
_DECORATION_KEY = "decoration:"


def get_decoration(root: Path) -> str:
    """Return the decoration named in the settings file, or ``"light"``.

    The file is scanned as plain text on every call so edits apply to the
    next operation without a restart.
    """
    path = settings_file(root)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.info("No readable settings file at %s (%s); using %s", path, exc, DEFAULT_DECORATION)
        return DEFAULT_DECORATION

    for line in text.splitlines():
        if line.startswith(_DECORATION_KEY):
            value = line.split(":")[1].strip()
            return _checked(root, value) if value else DEFAULT_DECORATION

    return DEFAULT_DECORATION


def _checked(root: Path, decoration: str) -> str:
    """Return *decoration* unless it names a path outside ``src/decoration``."""
    try:
        decoration_dir(root, decoration)
    except ValueError:
        logger.warning("Ignoring decoration %r outside the decoration directory; using %s", decoration, DEFAULT_DECORATION)
        return DEFAULT_DECORATION
    return decoration
