"""
arq worker entry point.

Runs the worker of one queue until SIGINT/SIGTERM:

    python -m app.worker PE          # country queue for Peru
    python -m app.worker CL          # country queue for Chile
    python -m app.worker completion  # completion queue
"""

import argparse
import logging
from typing import Any

from arq import run_worker

from app.config.settings import Settings, get_settings
from app.core.container import AppointmentContainer, BaseContainer
from app.core.shared.logger import configure_logging
from app.core.shared.sentry import init_sentry
from app.domains.appointment_scheduling.domain.value_objects import CountryISO
from app.domains.appointment_scheduling.infrastructure.consumers import (
    complete_appointment,
    process_country_appointment,
)
from app.integrations.databases.redis import get_arq_redis_settings

logger = logging.getLogger(__name__)

COMPLETION_TARGET = "completion"
TARGETS = (*CountryISO.values(), COMPLETION_TARGET)


async def startup(ctx: dict[str, Any]) -> None:
    """Build the containers on the worker's own arq pool."""
    base = BaseContainer(settings=ctx["settings"], queue_pool=ctx["redis"])
    ctx["base_container"] = base
    ctx["container"] = AppointmentContainer(base)
    logger.info(f"Worker {ctx['target']} listening on {ctx['queue_name']}")


async def shutdown(ctx: dict[str, Any]) -> None:
    base: BaseContainer | None = ctx.get("base_container")
    if base is not None:
        await base.aclose()
    logger.info(f"Worker {ctx['target']} shut down")


class WorkerSettings:
    """arq settings shared by the country and completion workers."""

    on_startup = startup
    on_shutdown = shutdown

    # Health check key refresh, in seconds
    health_check_interval = 60

    # Retries are driven by the jobs raising Retry
    retry_jobs = True


def worker_options(target: str, settings: Settings | None = None) -> dict[str, Any]:
    """Per-queue worker options for ``target`` (``PE``, ``CL`` or ``completion``)."""
    settings = settings or get_settings()

    if target == COMPLETION_TARGET:
        queue_name = settings.COMPLETION_QUEUE
        functions = [complete_appointment]
    else:
        queue_name = settings.country_queue(CountryISO.from_string(target).value)
        functions = [process_country_appointment]

    return {
        "functions": functions,
        "queue_name": queue_name,
        "redis_settings": get_arq_redis_settings(settings),
        "max_jobs": settings.WORKER_MAX_JOBS,
        "job_timeout": settings.JOB_TIMEOUT_S,
        "keep_result": settings.JOB_KEEP_RESULT_S,
        "max_tries": settings.JOB_MAX_TRIES,
        "ctx": {"settings": settings, "target": target, "queue_name": queue_name},
    }


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Worker de colas de citas médicas")
    parser.add_argument(
        "target",
        type=lambda value: value.lower() if value.lower() == COMPLETION_TARGET else value.upper(),
        choices=TARGETS,
        help="Cola a consumir: PE, CL o completion",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    configure_logging(
        level=settings.LOG_LEVEL,
        json_format=settings.LOG_JSON,
        service_name=f"{settings.SERVICE_NAME}-worker",
        environment=settings.ENVIRONMENT,
    )
    init_sentry(settings, component=f"worker-{args.target}")

    run_worker(WorkerSettings, **worker_options(args.target, settings))


if __name__ == "__main__":
    main()
