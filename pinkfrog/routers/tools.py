"""Tool endpoints: one ``POST /tools/<name>`` per operation plus a catalogue at ``GET /tools``.

Every handler re-reads the site from disk; nothing is shared between calls
except the preview servers started by ``run_server``.
"""

import logging
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from pinkfrog.config import Settings, get_settings
from pinkfrog.models.tool_args import (
    CreatePageArgs,
    GetComponentArgs,
    GetPageArgs,
    GetTemplateArgs,
    ListPagesArgs,
    NoArgs,
    RenderPageArgs,
    RunServerArgs,
    SaveHtmlArgs,
    SitemapArgs,
    StopServerArgs,
)
from pinkfrog.models.tool_results import (
    ComponentListResult,
    ComponentResult,
    CopyMediaResult,
    CreatePageResult,
    EmptyDistResult,
    GetPageResult,
    ListPagesResult,
    MarkdownRenderersResult,
    RenderPageResult,
    RunServerResult,
    SaveHtmlResult,
    SitemapResult,
    StopServerResult,
    TemplateResult,
    ToolInfo,
)
from pinkfrog.services import content, decoration, output, preview, renderer, sitemap

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/tools", tags=["tools"])


def _destructive_limit() -> str:
    return get_settings().rate_limit


_CATALOGUE = (
    ("list_pages", "List the markdown pages of a dataset.", ListPagesArgs),
    ("create_page", "Create or overwrite a markdown page with a title.", CreatePageArgs),
    ("get_page", "Read a page's frontmatter attributes and body.", GetPageArgs),
    ("get_markdown", "Get the markdown renderer snippets of the active decoration.", NoArgs),
    ("get_template", "Get a template of the active decoration.", GetTemplateArgs),
    ("get_component", "Get a component's template and usage examples.", GetComponentArgs),
    ("list_components", "List the components of the active decoration.", NoArgs),
    ("save_html", "Save an HTML file into dist.", SaveHtmlArgs),
    ("copy_media", "Copy src/media into dist/media.", NoArgs),
    ("empty_dist", "Delete everything inside dist.", NoArgs),
    ("xml_sitemap", "Write dist/sitemap.xml for a dataset.", SitemapArgs),
    ("run_server", "Serve dist over HTTP for previewing.", RunServerArgs),
    ("stop_server", "Stop a preview server started by run_server.", StopServerArgs),
    ("render_page", "Render a page through the active decoration into dist.", RenderPageArgs),
)


async def _call(func: Callable, *args):
    """Run a blocking service call in the threadpool, mapping argument errors to HTTP 400."""
    try:
        return await run_in_threadpool(func, *args)
    except ValueError as exc:
        logger.warning("Rejected tool arguments for %s: %s", func.__name__, exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("", response_model=List[ToolInfo], summary="List available tools")
async def list_tools() -> List[ToolInfo]:
    return [
        ToolInfo(name=name, description=description, input_schema=model.model_json_schema(by_alias=True))
        for name, description, model in _CATALOGUE
    ]


@router.post("/list_pages", response_model=ListPagesResult)
async def list_pages(
    body: Optional[ListPagesArgs] = None,
    settings: Settings = Depends(get_settings),
) -> ListPagesResult:
    body = body or ListPagesArgs()
    return await _call(content.list_pages, settings.cms_dir, body.data_set)


@router.post("/create_page", response_model=CreatePageResult)
async def create_page(body: CreatePageArgs, settings: Settings = Depends(get_settings)) -> CreatePageResult:
    logger.info("create_page", extra={"file_name": body.file_name, "dataset": body.data_set})
    return await _call(
        content.create_page, settings.cms_dir, body.data_set, body.file_name, body.title, body.body
    )


@router.post("/get_page", response_model=GetPageResult)
async def get_page(body: GetPageArgs, settings: Settings = Depends(get_settings)) -> GetPageResult:
    return await _call(content.get_page, settings.cms_dir, body.data_set, body.page_name)


@router.post("/get_markdown", response_model=MarkdownRenderersResult)
async def get_markdown(settings: Settings = Depends(get_settings)) -> MarkdownRenderersResult:
    return await _call(decoration.get_markdown_renderers, settings.cms_dir)


@router.post("/get_template", response_model=TemplateResult)
async def get_template(
    body: Optional[GetTemplateArgs] = None,
    settings: Settings = Depends(get_settings),
) -> TemplateResult:
    body = body or GetTemplateArgs()
    return await _call(decoration.get_template, settings.cms_dir, body.template)


@router.post("/get_component", response_model=ComponentResult)
async def get_component(body: GetComponentArgs, settings: Settings = Depends(get_settings)) -> ComponentResult:
    return await _call(decoration.get_component, settings.cms_dir, body.component)


@router.post("/list_components", response_model=ComponentListResult)
async def list_components(settings: Settings = Depends(get_settings)) -> ComponentListResult:
    return await _call(decoration.list_components, settings.cms_dir)


@router.post("/save_html", response_model=SaveHtmlResult)
async def save_html(body: SaveHtmlArgs, settings: Settings = Depends(get_settings)) -> SaveHtmlResult:
    return await _call(output.save_html, settings.cms_dir, body.file_name, body.content)


@router.post("/copy_media", response_model=CopyMediaResult)
@limiter.limit(_destructive_limit)
async def copy_media(request: Request, settings: Settings = Depends(get_settings)) -> CopyMediaResult:
    return await _call(output.copy_media, settings.cms_dir)


@router.post("/empty_dist", response_model=EmptyDistResult)
@limiter.limit(_destructive_limit)
async def empty_dist(request: Request, settings: Settings = Depends(get_settings)) -> EmptyDistResult:
    return await _call(output.empty_dist, settings.cms_dir)


@router.post("/xml_sitemap", response_model=SitemapResult)
async def xml_sitemap(body: SitemapArgs, settings: Settings = Depends(get_settings)) -> SitemapResult:
    logger.info("Sitemap request received", extra={"base_url": body.base_url, "dataset": body.data_set})
    return await _call(sitemap.build_sitemap, settings.cms_dir, body.data_set, body.base_url)


@router.post("/run_server", response_model=RunServerResult)
@limiter.limit(_destructive_limit)
async def run_server(
    request: Request,
    body: Optional[RunServerArgs] = None,
    settings: Settings = Depends(get_settings),
) -> RunServerResult:
    port = (body.port if body else None) or settings.preview_port
    return await _call(preview.run_server, settings.cms_dir, port, settings.preview_host)


@router.post("/stop_server", response_model=StopServerResult)
async def stop_server(body: StopServerArgs) -> StopServerResult:
    return await _call(preview.stop_server, body.port)


@router.post("/render_page", response_model=RenderPageResult)
async def render_page(body: RenderPageArgs, settings: Settings = Depends(get_settings)) -> RenderPageResult:
    return await _call(
        renderer.render_page,
        settings.cms_dir,
        body.data_set,
        body.page_name,
        body.template,
        body.file_name,
    )
