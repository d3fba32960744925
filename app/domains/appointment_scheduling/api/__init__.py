"""Appointment Scheduling API - FastAPI routes, schemas and dependencies."""

from .routes import router

__all__ = ["router"]
