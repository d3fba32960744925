"""Country ISO Value Object."""

from typing import Self

from app.core.domain.value_objects import StatusEnum

from ..exceptions import UnsupportedCountryError


class CountryISO(StatusEnum):
    """Countries where appointments can be booked."""

    PE = "PE"  # Peru
    CL = "CL"  # Chile

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a country code case-insensitively.

        Raises:
            UnsupportedCountryError: For empty input or any other country.
        """
        if not value:
            raise UnsupportedCountryError("")
        try:
            return super().from_string(value.strip())
        except ValueError:
            raise UnsupportedCountryError(value) from None

    @property
    def is_peru(self) -> bool:
        return self is CountryISO.PE

    @property
    def is_chile(self) -> bool:
        return self is CountryISO.CL
