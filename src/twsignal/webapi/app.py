"""FastAPI application exposing the analysis engine."""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config.logging import get_logger
from ..config.settings import Settings, get_settings
from ..services import AnalysisService
from .exceptions import setup_exception_handlers
from .health import router as health_router
from .models.responses import MessageResponse
from .routers import analysis_router, cache_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = app.state.settings
    logger.info(
        "Starting twsignal API",
        environment=settings.environment,
        transports=settings.fetch_transports,
        cache_enabled=settings.cache_enabled,
    )

    yield

    logger.info("twsignal API shutdown completed")


async def add_request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.info(
        "Request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        query_params=str(request.query_params),
        remote_addr=request.client.host if request.client else None,
    )

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id

    logger.info(
        "Request completed",
        request_id=request_id,
        status_code=response.status_code,
        method=request.method,
        path=request.url.path,
    )

    return response


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[AnalysisService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to ``get_settings()``)
        service: Analysis service to serve (built from settings when omitted)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="twsignal API",
        description="""
        Technical analysis for Taiwan-listed equities.

        ## Features

        * **Indicators**: Fibonacci moving averages and the KD oscillator
        * **Strategy**: Market regime, entry and exit prices
        * **Scoring**: 0-20 composite score with rating and risk level
        * **Backtest**: Win rates of past high-score signals
        * **Sectors and scans**: Batch analysis over watchlists
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.analysis_service = service or AnalysisService.from_settings(settings)

    app.middleware("http")(add_request_id_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1", tags=["Health & Status"])
    app.include_router(analysis_router, prefix="/api/v1", tags=["Analysis"])
    app.include_router(cache_router, prefix="/api/v1", tags=["Cache"])

    @app.get(
        "/",
        response_model=MessageResponse,
        summary="API Root Endpoint",
    )
    async def root(request: Request) -> MessageResponse:
        return MessageResponse.create(
            message="twsignal API - see /docs",
            request_id=request.state.request_id,
        )

    logger.info("FastAPI application created")
    return app
