from typing import Dict, List, Optional

from pydantic import Field

from pinkfrog.models.base import CamelModel, ToolResult


class ListPagesResult(ToolResult):
    pages: List[str] = Field(default_factory=list)
    directory: str
    directory_exists: bool = False
    directory_created: bool = False
    data_set: str


class CreatePageResult(ToolResult):
    file_path: str
    directory: str


class GetPageResult(ToolResult):
    file_path: str
    data_set: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    content: Optional[str] = None
    """Page body without the frontmatter block."""
    raw_content: Optional[str] = None


class MarkdownRenderersResult(ToolResult):
    decoration: str
    markdown_dir: str
    templates: Dict[str, str] = Field(default_factory=dict)
    """Renderer snippets keyed by file name, e.g. ``h1.html``."""


class TemplateResult(ToolResult):
    decoration: str
    template_path: str
    template_exists: bool = False
    template: Optional[str] = None


class ComponentResult(ToolResult):
    decoration: str
    component: str
    component_dir: str
    component_exists: bool = False
    template: Optional[str] = None
    example_md: Optional[str] = None
    example_html: Optional[str] = None


class ComponentListResult(ToolResult):
    decoration: str
    components_dir: str
    components: List[str] = Field(default_factory=list)


class SaveHtmlResult(ToolResult):
    file_path: str
    dist_dir: str


class CopyMediaResult(ToolResult):
    source_dir: str
    destination_dir: str
    files_copied: int = 0


class EmptyDistResult(ToolResult):
    dist_dir: str
    removed: int = 0


class SitemapEntry(CamelModel):
    loc: str
    lastmod: str
    changefreq: str = "weekly"
    priority: str = "0.8"


class SitemapResult(ToolResult):
    sitemap_path: str
    url_count: int = 0
    urls: List[SitemapEntry] = Field(default_factory=list)
    xml: Optional[str] = None


class RunServerResult(ToolResult):
    port: int
    url: str
    root_dir: str
    already_running: bool = False


class StopServerResult(ToolResult):
    port: int
    stopped: bool = False


class RenderPageResult(ToolResult):
    file_path: Optional[str] = None
    template: str
    page_name: str


class ToolInfo(CamelModel):
    name: str
    description: str
    input_schema: dict
