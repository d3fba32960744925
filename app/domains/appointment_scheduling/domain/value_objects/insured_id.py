"""Insured Id Value Object.

Insured ids are always stored as exactly five digits. Shorter input is
left-padded with zeros and any non-digit characters are discarded.
"""

import re
from dataclasses import dataclass
from typing import Self

from app.core.domain.value_objects import ValueObject

from ..exceptions import InvalidInsuredIdError

INSURED_ID_LENGTH = 5


@dataclass(frozen=True)
class InsuredId(ValueObject):
    """Normalized five digit insured identifier."""

    value: str

    def _validate(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != INSURED_ID_LENGTH or not self.value.isdigit():
            raise InvalidInsuredIdError(f"Invalid insured ID: {self.value}. Must be exactly {INSURED_ID_LENGTH} digits.")

    @classmethod
    def from_string(cls, raw: str) -> Self:
        """Normalize raw input ("123", "12-3") into a five digit id.

        Raises:
            InvalidInsuredIdError: If the input is empty, has no digits or
                has more than five digits.
        """
        if not raw:
            raise InvalidInsuredIdError("Insured ID cannot be empty")

        digits = re.sub(r"\D", "", str(raw))
        if not digits:
            raise InvalidInsuredIdError("Insured ID must contain at least one digit")
        if len(digits) > INSURED_ID_LENGTH:
            raise InvalidInsuredIdError(f"Insured ID cannot be longer than {INSURED_ID_LENGTH} digits")

        return cls(digits.zfill(INSURED_ID_LENGTH))

    @property
    def masked(self) -> str:
        """Log-safe form: first two digits followed by ``***``."""
        return f"{self.value[:2]}***"

    def __str__(self) -> str:
        return self.value
