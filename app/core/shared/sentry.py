"""
Sentry initialisation shared by the API process and the queue workers.
"""

import logging

import sentry_sdk

from app.config.settings import Settings

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings, component: str) -> bool:
    """
    Initialise Sentry when ``SENTRY_DSN`` is configured.

    Args:
        settings: Application settings
        component: ``api`` or the worker target, sent as a tag

    Returns:
        True if Sentry was initialised
    """
    if not settings.SENTRY_DSN:
        logger.info("SENTRY_DSN not configured - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=f"{settings.SERVICE_NAME}@{settings.VERSION}",
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        # Insured ids are PII
        send_default_pii=False,
    )
    sentry_sdk.set_tag("component", component)
    logger.info(f"Sentry initialised for {component}")
    return True
