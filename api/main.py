from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from banners import router as banners_router
from core import schema, settings
from core.db import Database
from core.errors import MediaError
from core.log import setup_logging
from core.storage import URL_PREFIX, BlobStore
from projects import router as projects_router

logger = logging.getLogger(__name__)


def create_app(
    *,
    database: Database | None = None,
    blob_store: BlobStore | None = None,
) -> FastAPI:
    database = database or Database()
    blob_store = blob_store or BlobStore(settings.upload_dir(), settings.public_base_url())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        # One pool per process; released on shutdown.
        await database.connect()
        try:
            if settings.db_auto_migrate():
                await schema.ensure_schema(database)
            blob_store.ensure_root()
            yield
        finally:
            await database.close()

    app = FastAPI(lifespan=lifespan)
    app.state.database = database
    app.state.blob_store = blob_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MediaError)
    async def media_error_handler(_: Request, exc: MediaError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(banners_router.router, tags=["banners"])
    app.include_router(projects_router.router, tags=["projects"])

    # Directory may not exist yet; lifespan creates it.
    app.mount(URL_PREFIX, StaticFiles(directory=blob_store.root, check_dir=False), name="uploads")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "portfolio media api"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
