"""Top-level API router. Mounted under ``API_V1_STR`` by the app factory."""

from fastapi import APIRouter

from app.domains.appointment_scheduling.api import router as appointments_router

api_router = APIRouter()

api_router.include_router(appointments_router)
