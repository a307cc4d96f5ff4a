"""FastAPI application factory for Service Catalog."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from service_catalog.common.config import get_settings
from service_catalog.common.logging import setup_logging
from service_catalog.common.schemas import HealthResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from service_catalog.catalog.seed import seed_services
        from service_catalog.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        if settings.seed_on_startup:
            async with db.get_session() as session:
                await seed_services(session)
        logger.info("Service Catalog started")
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s %d",
            request.method, request.url.path, client, response.status_code,
        )
        return response

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    from service_catalog.catalog.router import router as catalog_router

    app.include_router(catalog_router, prefix=settings.api_prefix, tags=["services"])

    return app
