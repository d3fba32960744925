"""
Application entry point.

Configures logging and error tracking, then builds the application with
the factory. All wiring lives in specialized modules.
"""

import logging

from app.config.settings import get_settings
from app.core.app_factory import create_app
from app.core.shared.logger import configure_logging
from app.core.shared.sentry import init_sentry

settings = get_settings()

configure_logging(
    level=settings.LOG_LEVEL,
    json_format=settings.LOG_JSON,
    service_name=settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT,
)
logger = logging.getLogger(__name__)

init_sentry(settings, component="api")

# Create application using factory
app = create_app(settings)


def main() -> None:
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    main()
