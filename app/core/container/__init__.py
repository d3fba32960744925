# ============================================================================
# SCOPE: GLOBAL
# Description: Contenedores de inyección de dependencias.
# ============================================================================
"""
Dependency Injection Containers.

Wires concrete implementations to the application ports.
"""

from .appointment_scheduling import AppointmentContainer
from .base import BaseContainer

__all__ = ["AppointmentContainer", "BaseContainer"]
