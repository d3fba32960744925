"""Country-specific booking rules.

One rule per supported country, keyed by ``CountryISO``. Rules are evaluated
on the schedule datetime as stored, in its own UTC offset.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType

from app.core.domain.exceptions import BusinessRuleViolationException

from ..entities import Schedule
from ..value_objects import CountryISO

CountryRule = Callable[[Schedule], None]

SUNDAY = 6
CHILE_FIRST_HOUR = 8
CHILE_LAST_HOUR = 17


def peru_no_sundays(schedule: Schedule) -> None:
    if schedule.date.weekday() == SUNDAY:
        raise BusinessRuleViolationException(
            "pe_no_sunday_appointments",
            "No appointments allowed on Sundays in Peru",
            {"scheduleId": schedule.schedule_id},
        )


def chile_business_hours(schedule: Schedule) -> None:
    hour = schedule.date.hour
    if hour < CHILE_FIRST_HOUR or hour > CHILE_LAST_HOUR:
        raise BusinessRuleViolationException(
            "cl_business_hours",
            "Appointments in Chile are only allowed between 8 AM and 5 PM",
            {"scheduleId": schedule.schedule_id, "hour": hour},
        )


COUNTRY_RULES: Mapping[CountryISO, CountryRule] = MappingProxyType(
    {
        CountryISO.PE: peru_no_sundays,
        CountryISO.CL: chile_business_hours,
    }
)

_missing = set(CountryISO) - set(COUNTRY_RULES)
if _missing:
    raise RuntimeError(f"No booking rule registered for: {sorted(c.value for c in _missing)}")
