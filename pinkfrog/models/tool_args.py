"""Argument bags accepted by the ``/tools/<name>`` endpoints."""

from typing import Optional

from pydantic import Field

from pinkfrog.models.base import CamelModel

DEFAULT_DATASET = "default"
DEFAULT_TEMPLATE = "index.html"


class NoArgs(CamelModel):
    pass


class ListPagesArgs(CamelModel):
    data_set: str = DEFAULT_DATASET


class CreatePageArgs(CamelModel):
    file_name: str = Field(description="Markdown file name, e.g. about.md")
    title: str
    body: str = Field(alias="copy", description="Markdown body written below the frontmatter.")
    data_set: str = DEFAULT_DATASET


class GetPageArgs(CamelModel):
    page_name: str
    data_set: str = DEFAULT_DATASET


class GetTemplateArgs(CamelModel):
    template: str = DEFAULT_TEMPLATE


class GetComponentArgs(CamelModel):
    component: str


class SaveHtmlArgs(CamelModel):
    file_name: str = Field(description="Path relative to dist/, sub-directories allowed.")
    content: str


class SitemapArgs(CamelModel):
    base_url: str = Field(description="Public site URL the page URLs are resolved against.")
    data_set: str = DEFAULT_DATASET


class RunServerArgs(CamelModel):
    port: Optional[int] = Field(default=None, ge=1, le=65535)


class StopServerArgs(CamelModel):
    port: int = Field(ge=1, le=65535)


class RenderPageArgs(CamelModel):
    page_name: str
    data_set: str = DEFAULT_DATASET
    template: str = DEFAULT_TEMPLATE
    file_name: Optional[str] = Field(
        default=None,
        description="Output path under dist/; defaults to the page alias or <name>.html.",
    )
