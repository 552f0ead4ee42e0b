import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import health_check, v1_router, RequestIDMiddleware
from .core import settings, init_db, close_db, setup_logging, EXCEPTION_HANDLERS

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db(app)
    logger.info(f"{settings.PROJECT_NAME} started (env={settings.ENV})")
    try:
        yield
    finally:
        await close_db()


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Build the resume API: CORS for the browser client, request ids, JSON
    error bodies, the health check and the v1 routers.

    ``use_lifespan=False`` skips the MongoDB connection so the caller can
    initialise the database itself.
    """
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=API_VERSION,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", RequestIDMiddleware.header_name],
        expose_headers=[RequestIDMiddleware.header_name],
    )
    app.add_middleware(RequestIDMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(health_check)
    app.include_router(v1_router)

    return app
