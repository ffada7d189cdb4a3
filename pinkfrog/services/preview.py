"""Local HTTP preview of the ``dist`` tree.

Servers run in background threads and keep serving until :func:`stop_server`
is called or the process exits.
"""

import logging
import threading
import time
from pathlib import Path
from typing import BinaryIO, Dict, Iterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from pinkfrog.models.tool_results import RunServerResult, StopServerResult
from pinkfrog.services.paths import dist_dir, resolve_within

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
INDEX_FILE = "index.html"
_CHUNK_SIZE = 64 * 1024
_STARTUP_TIMEOUT = 5.0

CONTENT_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".json": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogg": "audio/ogg",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".eot": "application/vnd.ms-fontobject",
}
FALLBACK_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), FALLBACK_CONTENT_TYPE)


def _stream(handle: BinaryIO, path: Path) -> Iterator[bytes]:
    with handle:
        try:
            while True:
                chunk = handle.read(_CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        except OSError:
            # Headers are already on the wire; the connection is simply dropped.
            logger.exception("Stream error while serving %s", path)
            raise


def create_preview_app(root_dir: Path) -> FastAPI:
    """Return an app that serves the files below *root_dir*."""
    app = FastAPI(title="pinkfrog preview", docs_url=None, redoc_url=None, openapi_url=None)

    @app.api_route("/{request_path:path}", methods=["GET", "HEAD"])
    async def serve(request: Request, request_path: str):
        try:
            path = resolve_within(root_dir, request_path.lstrip("/") or INDEX_FILE)
        except ValueError:
            return PlainTextResponse("Not Found", status_code=404)

        if path.is_dir():
            path = path / INDEX_FILE
        if not path.is_file():
            return PlainTextResponse("Not Found", status_code=404)

        if request.method == "HEAD":
            return Response(
                media_type=content_type_for(path),
                headers={"content-length": str(path.stat().st_size)},
            )

        try:
            handle = path.open("rb")
        except OSError as exc:
            logger.error("Could not open %s: %s", path, exc)
            return PlainTextResponse("Internal Server Error", status_code=500)

        return StreamingResponse(_stream(handle, path), media_type=content_type_for(path))

    return app


class PreviewServer:
    """A uvicorn server for one ``dist`` directory running on its own thread."""

    def __init__(self, root_dir: Path, host: str, port: int):
        self.root_dir = root_dir
        self.host = host
        self.port = port
        config = uvicorn.Config(
            create_preview_app(root_dir),
            host=host,
            port=port,
            log_level="warning",
            log_config=None,
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(target=self._serve, name=f"preview-{port}", daemon=True)

    def _serve(self) -> None:
        try:
            self._server.run()
        except SystemExit:
            # uvicorn exits when the socket cannot be bound.
            logger.error("Preview server on port %s exited during startup", self.port)

    @property
    def url(self) -> str:
        return _public_url(self.host, self.port)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and self._server.started

    def start(self, timeout: float = _STARTUP_TIMEOUT) -> bool:
        """Start serving; return *False* if the socket could not be bound in time."""
        self._thread.start()
        deadline = time.monotonic() + timeout
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self._server.should_exit = True
                return False
            time.sleep(0.05)
        return True

    def stop(self, timeout: float = _STARTUP_TIMEOUT) -> None:
        self._server.should_exit = True
        self._thread.join(timeout)


_servers: Dict[int, PreviewServer] = {}


def _public_url(host: str, port: int) -> str:
    if host in ("0.0.0.0", "127.0.0.1"):
        host = "localhost"
    return f"http://{host}:{port}"


def run_server(root: Path, port: int = DEFAULT_PORT, host: str = "127.0.0.1") -> RunServerResult:
    """Serve ``dist`` on *port* until stopped."""
    dist = dist_dir(root)
    existing = _servers.get(port)
    if existing is not None and existing.running:
        return RunServerResult(
            port=port,
            url=existing.url,
            root_dir=str(existing.root_dir),
            already_running=True,
        )

    result = RunServerResult(port=port, url=_public_url(host, port), root_dir=str(dist))
    if not dist.is_dir():
        logger.warning("Cannot preview missing directory %s", dist)
        return result.fail(f"Output directory does not exist: {dist}")

    server = PreviewServer(dist, host, port)
    if not server.start():
        logger.error("Preview server failed to start on port %s", port)
        return result.fail(f"Could not start preview server on port {port}")

    _servers[port] = server
    logger.info("Preview server started", extra={"url": server.url, "root_dir": str(dist)})
    return result


def stop_server(port: int) -> StopServerResult:
    result = StopServerResult(port=port)
    server = _servers.pop(port, None)
    if server is None:
        return result.warn(f"No preview server is running on port {port}")

    server.stop()
    result.stopped = True
    logger.info("Preview server stopped", extra={"port": port})
    return result
