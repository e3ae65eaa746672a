"""
Entrypoint for the FastAPI application.

Creates the app, configures CORS, wires the metric store and includes the
routers.  This module is intended to be invoked by an ASGI server
(e.g. uvicorn).
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import InvalidArgument, NotFound
from .repository import InMemoryMetricRepository, MetricRepository, SqlMetricRepository
from .routers import counters as counters_router
from .routers import health as health_router
from .middleware.correlation import RequestIdMiddleware
from .middleware.metrics import MetricsMiddleware

logger = logging.getLogger(__name__)


def build_repository() -> MetricRepository:
    """Create the metric store selected by ``METRIC_STORE``."""
    if settings.metric_store == "sql":
        from .db import Base, SessionLocal, engine
        from . import models  # noqa: F401  # register tables on Base

        Base.metadata.create_all(bind=engine)
        return SqlMetricRepository(SessionLocal)
    return InMemoryMetricRepository()


def create_app(repository: Optional[MetricRepository] = None) -> FastAPI:
    if repository is None:
        repository = build_repository()
    logger.info("Serving counters from %s", type(repository).__name__)

    app = FastAPI(title="Counter Admin API", version="0.1.0")
    app.state.metric_repository = repository

    origins = [o.strip() for o in settings.allowed_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "DELETE"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With", "X-Request-ID"],
    )
    if settings.record_request_metrics:
        app.add_middleware(MetricsMiddleware)
    # Added last so it wraps everything and audit entries see the request id
    app.add_middleware(RequestIdMiddleware)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: InvalidArgument):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    app.include_router(counters_router.router)
    app.include_router(health_router.router)

    @app.get("/")
    def root():
        return {"status": "ok"}
    return app


app = create_app()
