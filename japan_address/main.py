from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from japan_address.clients.catalog_source import AbstractCatalogSource, DataSourceError
from japan_address.config import settings

logger = structlog.get_logger()

VERSION = "1.0.0"


def build_catalog_source() -> AbstractCatalogSource:
    """Local catalog directory when configured, otherwise the remote API."""
    if settings.catalog_dir:
        from japan_address.clients.local_catalog import LocalCatalogSource
        return LocalCatalogSource(settings.catalog_dir)

    from japan_address.clients.japanese_addresses import JapaneseAddressesClient
    return JapaneseAddressesClient()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from japan_address.services.address_parser import AddressParser
    from japan_address.services.catalog_cache import CatalogCache

    source = build_catalog_source()
    app.state.address_parser = AddressParser(CatalogCache(source))
    logger.info(
        "Starting address API",
        env=settings.app_env,
        source=type(source).__name__,
        town_cache_size=settings.town_cache_size,
    )

    yield

    await source.close()
    logger.info("Shutting down address API")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Japanese Address Normalizer API",
        description="Splits Japanese addresses into prefecture, city and town.",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from japan_address.api.v1.router import api_router

    app.include_router(api_router, prefix="/api/v1")

    @app.exception_handler(DataSourceError)
    async def data_source_error_handler(request: Request, exc: DataSourceError):
        logger.error("Catalog source failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=502, content={"detail": "Address catalog unavailable"})

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
