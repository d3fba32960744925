# Domain Services
from .appointment_domain_service import AppointmentDomainService, DomainResult
from .country_rules import COUNTRY_RULES, CountryRule

__all__ = ["AppointmentDomainService", "DomainResult", "COUNTRY_RULES", "CountryRule"]
