"""
BestEats FastAPI Application
Main entry point: builds the favorites store, the map session and the API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import health, restaurants, map as map_routes
from adapters.store import PersistentStore
from adapters.kakao_local import KakaoLocalClient, PlaceSearchClient
from adapters.location import ReportedLocationProvider
from app.config import settings as default_settings, Settings
from app.exceptions import AppError, StorageError
from domain.schemas.place_schemas import Coordinate
from repositories.favorites_repository import FavoritesRepository
from services.location_session import LocationSession
from services.map_controller import MapInteractionController

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_exception_handler,
    general_exception_handler,
)

_logger = logging.getLogger("besteats.main")


def setup_logging(cfg: Settings) -> None:
    """Configure logging for the application"""
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format=cfg.log_format,
    )
    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if cfg.db_echo else logging.WARNING
    )


async def open_store(cfg: Settings) -> PersistentStore:
    """
    Open the favorites store, retrying a few times.

    Raises:
        StorageError: if the store still cannot be opened after the last attempt
    """
    store = PersistentStore(cfg.database_url, echo=cfg.db_echo)
    for attempt in range(1, cfg.db_init_attempts + 1):
        try:
            # Run blocking open in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(store.open)
            return store
        except StorageError as exc:
            _logger.warning(
                "Store open attempt %d/%d failed: %s",
                attempt,
                cfg.db_init_attempts,
                exc,
            )
            if attempt < cfg.db_init_attempts:
                await anyio.sleep(cfg.db_init_delay_sec)
            else:
                _logger.error("Store could not be opened after %d attempts", attempt)
                raise


def create_app(
    cfg: Optional[Settings] = None,
    search_client: Optional[PlaceSearchClient] = None,
    location_provider: Optional[ReportedLocationProvider] = None,
) -> FastAPI:
    """
    Build the application.

    The search client and location provider default to the Kakao client and a
    client-reported provider built from settings; tests pass their own.
    """
    cfg = cfg or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: open the store (fatal on failure), load favorites and wire the
        map session. Shutdown: cancel searches and close everything.
        """
        _logger.info(f"Starting {cfg.app_name} in {cfg.environment.value} mode")

        store = await open_store(cfg)
        favorites = FavoritesRepository(store)
        favorites.load()

        client = search_client
        owned_client = None
        if client is None:
            owned_client = client = KakaoLocalClient(
                api_key=cfg.kakao_rest_api_key,
                base_url=cfg.kakao_local_base_url,
                timeout=cfg.search_timeout_sec,
                page_size=cfg.search_page_size,
            )

        provider = location_provider
        if provider is None:
            seed = None
            if cfg.default_latitude is not None and cfg.default_longitude is not None:
                seed = Coordinate(
                    latitude=cfg.default_latitude, longitude=cfg.default_longitude
                )
            provider = ReportedLocationProvider(default=seed)

        session = LocationSession(
            provider,
            client,
            category=cfg.default_category,
            radius=cfg.search_radius_m,
            search_timeout=cfg.search_timeout_sec,
            location_timeout=cfg.location_timeout_sec,
        )
        controller = MapInteractionController(
            session, span_delta=cfg.map_span_delta, no_data_label=cfg.no_data_label
        )

        app.state.settings = cfg
        app.state.store = store
        app.state.favorites = favorites
        app.state.location_provider = provider
        app.state.location_session = session
        app.state.map_controller = controller

        try:
            yield
        finally:
            _logger.info(f"Shutting down {cfg.app_name}")
            controller.close()
            await session.aclose()
            if owned_client is not None:
                await owned_client.aclose()
            store.close()

    app = FastAPI(
        title=cfg.api_title,
        version=cfg.app_version,
        description=cfg.api_description,
        lifespan=lifespan,
        debug=cfg.debug,
        openapi_url=(
            f"{cfg.api_prefix}/openapi.json" if not cfg.is_production() else None
        ),
        docs_url=f"{cfg.api_prefix}/docs" if not cfg.is_production() else None,
        redoc_url=f"{cfg.api_prefix}/redoc" if not cfg.is_production() else None,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=cfg.cors_allow_credentials,
        allow_methods=cfg.cors_allow_methods,
        allow_headers=cfg.cors_allow_headers,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router, prefix=cfg.api_prefix)
    app.include_router(restaurants.router, prefix=cfg.api_prefix)
    app.include_router(map_routes.router, prefix=cfg.api_prefix)

    return app


setup_logging(default_settings)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development(),
        log_level=default_settings.log_level.lower(),
    )
