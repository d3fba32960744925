"""
Application factory for the appointment API.

Builds the FastAPI application that accepts bookings and lists an insured
person's appointments under ``API_V1_STR``. Domain errors are mapped to HTTP
responses by the handlers in ``app.api.exception_handlers``, and every request
is tagged with a correlation id by the logging middleware. The database
engine, the Redis client and the arq queue pool are opened by the lifespan,
not here, so building an app never touches the network.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.middleware.logging_middleware import RequestLoggingMiddleware
from app.api.router import api_router
from app.config.settings import Settings, get_settings
from app.core.lifecycle import lifespan
from app.domains.appointment_scheduling.domain.value_objects import CountryISO

logger = logging.getLogger(__name__)


class AppFactory:
    """Builds the appointment API for one set of settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def create_app(self) -> FastAPI:
        """
        Create the appointment API.

        The settings are kept on ``app.state`` for the dependency providers
        and the lifespan.
        """
        app = self._create_base_app()
        app.state.settings = self._settings

        self._configure_middleware(app)
        self._configure_exception_handlers(app)
        self._configure_routes(app)
        self._configure_health_endpoint(app)

        logger.info(f"Appointment API created for countries {', '.join(CountryISO.values())}")
        return app

    def _create_base_app(self) -> FastAPI:
        # Interactive docs only in debug
        docs_prefix = self._settings.API_V1_STR if self._settings.DEBUG else None
        return FastAPI(
            title=self._settings.PROJECT_NAME,
            description=self._settings.PROJECT_DESCRIPTION,
            version=self._settings.VERSION,
            docs_url=f"{docs_prefix}/docs" if docs_prefix else None,
            redoc_url=f"{docs_prefix}/redoc" if docs_prefix else None,
            lifespan=lifespan,
        )

    def _configure_middleware(self, app: FastAPI) -> None:
        """
        Configure application middleware.

        Middleware order matters:
        1. CORS (outermost)
        2. Request logging, which binds the correlation id and times the request
        """
        app.add_middleware(RequestLoggingMiddleware)

        # Added last so it wraps everything else
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._get_cors_origins(),
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
            expose_headers=["X-Correlation-ID", "X-Response-Time-Ms"],
        )

    def _configure_exception_handlers(self, app: FastAPI) -> None:
        register_exception_handlers(app)

    def _configure_routes(self, app: FastAPI) -> None:
        app.include_router(api_router, prefix=self._settings.API_V1_STR)
        logger.info(f"Appointment routes mounted under {self._settings.API_V1_STR}")

    def _configure_health_endpoint(self, app: FastAPI) -> None:
        @app.get("/health", tags=["health"])
        async def health_check() -> dict:
            """Liveness of the API process and the countries it books for."""
            return {
                "status": "ok",
                "service": self._settings.SERVICE_NAME,
                "environment": self._settings.ENVIRONMENT,
                "countries": CountryISO.values(),
            }

    def _get_cors_origins(self) -> list[str]:
        if self._settings.DEBUG:
            return ["*"]
        return self._settings.CORS_ORIGINS


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the appointment API, with ``settings`` overriding the environment."""
    return AppFactory(settings).create_app()
