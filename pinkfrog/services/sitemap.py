"""XML sitemap generation for a dataset of content pages."""

import datetime as dt
import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import urljoin
from xml.etree import ElementTree

from pinkfrog.models.tool_results import SitemapEntry, SitemapResult
from pinkfrog.services import frontmatter
from pinkfrog.services.content import PAGE_SUFFIX, list_pages
from pinkfrog.services.paths import content_dir, dist_dir

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_FILE = "sitemap.xml"

_HOME_PAGE = "index.html"
_CHANGE_FREQUENCY = "weekly"


def page_url(page_name: str, alias: Optional[str] = None) -> str:
    """Return the site-relative URL of a page: its alias, else ``<name>.html``."""
    if alias:
        return alias
    return page_name[: -len(PAGE_SUFFIX)] + ".html" if page_name.endswith(PAGE_SUFFIX) else page_name


def join_url(base_url: str, relative: str) -> str:
    """Resolve *relative* beneath *base_url*.

    The base always gets one trailing slash and the relative path loses its
    leading one, so ``/about.html`` against ``https://x.dev/site`` becomes
    ``https://x.dev/site/about.html``.  Absolute URLs pass through.
    """
    return urljoin(base_url.rstrip("/") + "/", relative.lstrip("/"))


def render_sitemap(entries: List[SitemapEntry]) -> str:
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = entry.loc
        ElementTree.SubElement(url, "lastmod").text = entry.lastmod
        ElementTree.SubElement(url, "changefreq").text = entry.changefreq
        ElementTree.SubElement(url, "priority").text = entry.priority
    ElementTree.indent(urlset, space="  ")
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def build_sitemap(
    root: Path,
    dataset: str,
    base_url: str,
    today: Optional[dt.date] = None,
) -> SitemapResult:
    """Build ``dist/sitemap.xml`` from the pages of *dataset*.

    Pages that cannot be read are skipped and reported in ``warnings``.

    Raises:
        ValueError: if *base_url* is empty.
    """
    if not base_url:
        raise ValueError("baseUrl is required")

    lastmod = (today or dt.datetime.now(dt.timezone.utc).date()).isoformat()
    output = dist_dir(root) / SITEMAP_FILE
    result = SitemapResult(sitemap_path=str(output))

    listing = list_pages(root, dataset)
    if not listing.success and listing.message:
        logger.warning("Dataset %s unavailable for sitemap: %s", dataset, listing.message)
        result.warn(listing.message)
    for warning in listing.warnings:
        result.warn(warning)
    directory = content_dir(root, dataset)

    entries: List[SitemapEntry] = []
    for name in listing.pages:
        try:
            raw = (directory / name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping page %s in sitemap: %s", name, exc)
            result.warn(f"Skipped {name}: {exc}")
            continue

        relative = page_url(name, frontmatter.parse(raw).attributes.get("alias"))
        entries.append(
            SitemapEntry(
                loc=join_url(base_url, relative),
                lastmod=lastmod,
                changefreq=_CHANGE_FREQUENCY,
                priority="1.0" if relative == _HOME_PAGE else "0.8",
            )
        )

    xml = render_sitemap(entries)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(xml, encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write sitemap %s: %s", output, exc)
        return result.fail(f"Could not write sitemap: {exc}")

    logger.info("Sitemap written", extra={"path": str(output), "url_count": len(entries)})
    result.urls = entries
    result.url_count = len(entries)
    result.xml = xml
    return result
