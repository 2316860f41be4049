"""Main FastAPI application for the Cheat Risk Analyzer."""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cheat_risk.core import (
    InputValidationError,
    PlayerNotFoundError,
    ServiceException,
    Settings,
    TTLCache,
    UpstreamFailure,
    get_global_settings,
    setup_logging,
)
from cheat_risk.core.chess_api import ChessAPIClient
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from cheat_risk.features.history import (
    HistoryRepositoryInterface,
    InMemoryHistoryRepository,
    JsonFileHistoryRepository,
    history_router,
)
from cheat_risk.features.player_metrics import PlayerDataGateway
from cheat_risk.features.risk_scoring import RiskAnalysisService, risk_scoring_router
from cheat_risk.features.settings import (
    PreferencesStore,
    UserPreferences,
    settings_router,
)

APP_VERSION = "0.1.0"

logger = structlog.get_logger(__name__)


def _build_history_repository(settings: Settings) -> HistoryRepositoryInterface:
    if settings.history_path:
        return JsonFileHistoryRepository(
            settings.history_path, max_entries=settings.history_max_entries
        )
    return InMemoryHistoryRepository(max_entries=settings.history_max_entries)


def _error_body(error: str, exc: ServiceException, **extra: Any) -> Dict[str, Any]:
    return {"error": error, "detail": exc.message, **extra}


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlayerNotFoundError)
    async def player_not_found_handler(
        request: Request, exc: PlayerNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(exc.tag, exc, username=exc.username),
        )

    @app.exception_handler(UpstreamFailure)
    async def upstream_failure_handler(
        request: Request, exc: UpstreamFailure
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=_error_body(
                exc.tag,
                exc,
                username=exc.username,
                upstream_status=exc.status_code,
            ),
        )

    @app.exception_handler(InputValidationError)
    async def input_validation_handler(
        request: Request, exc: InputValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_body("invalid_input", exc, errors=exc.errors),
        )

    @app.exception_handler(ServiceException)
    async def service_exception_handler(
        request: Request, exc: ServiceException
    ) -> JSONResponse:
        logger.error(
            "Unhandled service error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("internal_error", exc),
        )


def create_app(
    settings: Optional[Settings] = None,
    scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    :param settings: Application settings; the global settings when omitted
    :param scoring_config: Engine constants
    :param transport: Optional httpx transport for the chess.com client
    :returns: Configured FastAPI application
    """
    settings = settings or get_global_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting up Cheat Risk Analyzer", version=APP_VERSION)

        client = ChessAPIClient(
            base_url=settings.chess_api_base_url,
            timeout_seconds=settings.chess_api_timeout_seconds,
            max_retries=settings.chess_api_max_retries,
            backoff_base_seconds=settings.chess_api_backoff_base_seconds,
            max_backoff_seconds=settings.chess_api_max_backoff_seconds,
            user_agent=settings.chess_api_user_agent,
            transport=transport,
        )
        await client.start_session()

        player_cache = TTLCache(
            maxsize=settings.cache_max_entries, ttl=settings.cache_ttl_seconds
        )
        gateway = PlayerDataGateway(
            client,
            cache=player_cache,
            recent_games_limit=settings.recent_games_limit,
        )
        history_repository = _build_history_repository(settings)
        preferences_store = PreferencesStore(
            UserPreferences(rated_only=settings.rated_only)
        )

        app.state.chess_api_client = client
        app.state.player_cache = player_cache
        app.state.history_repository = history_repository
        app.state.preferences_store = preferences_store
        app.state.risk_analysis_service = RiskAnalysisService(
            gateway, history_repository, preferences_store, config=scoring_config
        )

        try:
            yield
        finally:
            logger.info("Shutting down Cheat Risk Analyzer")
            await client.close()

    app = FastAPI(
        title="Cheat Risk Analyzer",
        description="""
    Heuristic cheat risk scoring for chess.com players.

    The score (0-100) combines all-time win rate, recent win rate and the
    share of high-accuracy games per format, weighted by sample size and
    boosted for young accounts. It is a signal for further review, not a
    verdict.
    """,
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(risk_scoring_router, prefix="/api/v1")
    app.include_router(history_router, prefix="/api/v1")
    app.include_router(settings_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health_check(request: Request) -> Dict[str, Any]:
        """
        Health check endpoint.

        Reports the application version, debug mode and player cache usage.
        """
        return {
            "status": "healthy",
            "message": "Application is running",
            "version": APP_VERSION,
            "debug": settings.debug,
            "cache": request.app.state.player_cache.stats(),
        }

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_global_settings()
    uvicorn.run(
        "cheat_risk.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
