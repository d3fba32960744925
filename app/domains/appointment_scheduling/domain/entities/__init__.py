# Domain Entities
from .appointment import Appointment
from .insured import Insured
from .schedule import Schedule

__all__ = ["Appointment", "Insured", "Schedule"]
