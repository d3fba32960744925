"""Queue workers: arq job functions and the saga message handlers."""

from .handlers import CompletionHandler, CountryAppointmentHandler
from .jobs import complete_appointment, dead_letter, is_retryable, process_country_appointment, run_job

__all__ = [
    "CompletionHandler",
    "CountryAppointmentHandler",
    "complete_appointment",
    "dead_letter",
    "is_retryable",
    "process_country_appointment",
    "run_job",
]
