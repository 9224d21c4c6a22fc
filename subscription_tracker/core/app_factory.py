from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.subscription_service import SubscriptionService
from ..infrastructure.persistence.database import create_database_engine, initialize_schema
from ..infrastructure.repositories.subscription_repository import SqlSubscriptionRepository
from ..presentation.api.errors import register_exception_handlers
from ..presentation.api.middleware import correlation_middleware
from ..presentation.api.routers import subscriptions as subscriptions_router

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Subscription Tracker",
        description="CRUD and cost aggregation for user subscriptions.",
        version="1.0.0",
        docs_url="/swagger/index.html",
        openapi_url="/swagger/doc.json",
        redoc_url=None,
        lifespan=_create_lifespan(settings, engine),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(correlation_middleware)
    register_exception_handlers(app)

    app.include_router(subscriptions_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Settings, engine: Optional[Engine]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings)
        owns_engine = engine is None
        active_engine = engine or create_database_engine(settings.build_database_url())
        initialize_schema(active_engine)

        repository = SqlSubscriptionRepository(active_engine)
        container = ApplicationContainer(
            settings=settings,
            engine=active_engine,
            repository=repository,
            subscription_service=SubscriptionService(repository),
        )
        app.state.container = container  # type: ignore[attr-defined]
        logger.info("Subscription Tracker started (environment=%s)", settings.environment)

        try:
            yield
        finally:
            if owns_engine:
                active_engine.dispose()
                logger.info("Database connection pool closed")

    return lifespan
