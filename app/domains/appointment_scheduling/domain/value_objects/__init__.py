# Domain Value Objects
from .appointment_id import AppointmentId
from .appointment_status import AppointmentStatus
from .country_iso import CountryISO
from .insured_id import InsuredId

__all__ = ["AppointmentId", "AppointmentStatus", "CountryISO", "InsuredId"]
