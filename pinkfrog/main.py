import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pinkfrog.config import get_settings
from pinkfrog.routers.tools import limiter, router as tools_router

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": get_settings().log_level, "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="pinkfrog CMS tools",
    description="File-backed site assembly: content pages, decorations, dist output and a preview server.",
    version="1.0.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"success": False, "status": "failed", "message": "An unexpected error occurred."},
    )


app.include_router(tools_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    settings = get_settings()
    return {"message": "pinkfrog CMS tools", "cmsDir": str(settings.cms_dir)}


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Starting tool API", extra={"cms_dir": str(settings.cms_dir)})
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
