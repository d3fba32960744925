"""Insured - the patient booking the appointment."""

from dataclasses import dataclass
from typing import Any, Self

from app.core.domain.value_objects import ValueObject

from ..value_objects import CountryISO, InsuredId


@dataclass(frozen=True)
class Insured(ValueObject):
    """Insured patient identified by country and insured id.

    Two insured with the same country and id are the same patient.
    """

    country_iso: CountryISO
    insured_id: InsuredId

    @classmethod
    def from_primitives(cls, country_iso: str, insured_id: str) -> Self:
        return cls(
            country_iso=CountryISO.from_string(country_iso),
            insured_id=InsuredId.from_string(insured_id),
        )

    def to_primitives(self) -> dict[str, Any]:
        return {"countryISO": self.country_iso.value, "insuredId": self.insured_id.value}

    def to_log_safe_dict(self) -> dict[str, Any]:
        """Same as ``to_primitives`` with the insured id masked."""
        return {"countryISO": self.country_iso.value, "insuredId": self.insured_id.masked}
