"""
arq job functions for the saga queues.

Delivery is at-least-once. Every job runs its handler and then:

- finishes on success, and also when running again can never help
  (non-retryable domain errors, messages that break the contract);
- raises ``arq.worker.Retry`` for any other failure while tries remain;
- copies the message to the dead-letter stream on the last try.

Worker context keys read here: ``settings``, ``target`` (country code or
``completion``), ``queue_name`` and ``container``, set by the worker
entry point; ``redis``, ``job_id`` and ``job_try``, set by arq.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from arq.worker import Retry

from app.core.domain.exceptions import DomainException
from app.core.shared.logger import correlation_id_var
from app.domains.appointment_scheduling.domain.value_objects import CountryISO

from ..messaging.codec import QueueMessage, encode_message
from .handlers import CompletionHandler, CountryAppointmentHandler

if TYPE_CHECKING:
    from app.config.settings import Settings

logger = logging.getLogger(__name__)

MessageHandler = Callable[[QueueMessage], Awaitable[Any]]


def is_retryable(exc: Exception) -> bool:
    """Domain errors declare whether running again can help; anything else is retried."""
    if isinstance(exc, DomainException):
        return exc.retryable
    return True


async def run_job(
    ctx: dict[str, Any],
    handler: MessageHandler,
    body: dict[str, Any],
    attributes: dict[str, str] | None = None,
) -> Any:
    """Run ``handler`` for one job and turn its failure into a retry decision."""
    settings: Settings = ctx["settings"]
    message = QueueMessage(
        job_id=ctx.get("job_id", "unknown"),
        body=body,
        attributes=attributes or {},
        job_try=ctx.get("job_try", 1),
    )

    token = correlation_id_var.set(message.job_id)
    try:
        return await handler(message)
    except Exception as e:
        if not is_retryable(e):
            logger.warning(
                f"Rejected job {message.job_id}: {type(e).__name__}: {e}",
                extra={"extra_data": message.body},
            )
            return None

        if message.job_try < settings.JOB_MAX_TRIES:
            logger.error(
                f"Job {message.job_id} failed on try {message.job_try}/{settings.JOB_MAX_TRIES}, retrying: {e}",
                exc_info=not isinstance(e, DomainException),
            )
            raise Retry(defer=settings.JOB_RETRY_DELAY_S * message.job_try) from e

        await dead_letter(ctx, message, e)
        return None
    finally:
        correlation_id_var.reset(token)


async def dead_letter(ctx: dict[str, Any], message: QueueMessage, exc: Exception) -> None:
    settings: Settings = ctx["settings"]
    queue = ctx.get("queue_name", "")
    await ctx["redis"].xadd(
        settings.DEAD_LETTER_STREAM,
        {
            **encode_message(message.body, message.attributes),
            "sourceQueue": queue,
            "jobId": message.job_id,
            "tries": str(message.job_try),
            "error": f"{type(exc).__name__}: {exc}",
        },
        maxlen=settings.STREAM_MAX_LENGTH,
        approximate=True,
    )
    logger.error(
        f"Job {message.job_id} on {queue} moved to dead-letter after {message.job_try} tries: {exc}",
        extra={"extra_data": message.body},
    )


async def process_country_appointment(
    ctx: dict[str, Any],
    body: dict[str, Any],
    attributes: dict[str, str] | None = None,
) -> Any:
    """Country queue job. The worker target is the country it serves."""
    handler = CountryAppointmentHandler(ctx["container"], CountryISO.from_string(ctx["target"]))
    return await run_job(ctx, handler, body, attributes)


async def complete_appointment(
    ctx: dict[str, Any],
    body: dict[str, Any],
    attributes: dict[str, str] | None = None,
) -> Any:
    return await run_job(ctx, CompletionHandler(ctx["container"]), body, attributes)
