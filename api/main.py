# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-18
# Description: main.py
# -----------------------------------------------------------------------------
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.AppContainer import AppContainer
from api.routers import health, similar
from config.Config import Config
from errors.DenseSearchErrors import DenseSearchError

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)


def create_app(container: Optional[AppContainer] = None, cfg: Optional[Config] = None) -> FastAPI:
    """
    Build the API. Without an injected container one is built in the
    lifespan hook, so a missing model or bad artifacts abort startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if container is None:
            app.state.container = AppContainer(cfg)
        yield

    app = FastAPI(title="densesearch API", lifespan=lifespan)
    if container is not None:
        app.state.container = container

    @app.exception_handler(DenseSearchError)
    async def dense_search_error_handler(request: Request, exc: DenseSearchError):
        logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": str(exc), "error": type(exc).__name__})

    app.include_router(health.router)
    app.include_router(similar.router)
    return app


app = create_app()


def run() -> None:
    """Entry point for `dense-serve`: bind to the configured host:port."""
    cfg = Config.from_env()
    logger.info("Starting densesearch API on %s:%d", cfg.host, cfg.port)
    uvicorn.run(create_app(cfg=cfg), host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    run()
