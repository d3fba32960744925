from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración de la aplicación utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Medical Appointment Scheduling API"
    PROJECT_DESCRIPTION: str = "Agendamiento de citas médicas para asegurados de Perú y Chile"
    VERSION: str = "1.0.0"
    SERVICE_NAME: str = Field("medical-appointment-scheduling", description="Nombre del servicio en los logs")
    API_HOST: str = Field("0.0.0.0", description="Host de escucha de uvicorn")
    API_PORT: int = Field(8000, description="Puerto de escucha de uvicorn")
    CORS_ORIGINS: list[str] = Field(default_factory=list, description="Orígenes permitidos fuera de modo debug")

    # Environment
    ENVIRONMENT: str = Field("development", description="Entorno de ejecución")
    DEBUG: bool = Field(False, description="Modo debug")
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    LOG_JSON: bool = Field(False, description="Emitir logs en formato JSON")
    SENTRY_DSN: str | None = Field(None, description="DSN de Sentry (opcional)")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.1, description="Fracción de trazas enviadas a Sentry")

    # PostgreSQL Database Settings (per-country relational store)
    DB_HOST: str = Field("localhost", description="Host de PostgreSQL")
    DB_PORT: int = Field(5432, description="Puerto de PostgreSQL")
    DB_NAME: str = Field("medical_appointments", description="Nombre de la base de datos")
    DB_USER: str = Field("postgres", description="Usuario de PostgreSQL")
    DB_PASSWORD: str | None = Field(None, description="Contraseña de PostgreSQL")
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Tamaño del pool de conexiones")
    DB_MAX_OVERFLOW: int = Field(20, description="Máximo overflow del pool")
    DB_POOL_RECYCLE: int = Field(3600, description="Reciclar conexiones cada X segundos")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout para obtener conexión del pool")

    # One schema per country
    COUNTRY_DB_SCHEMAS: dict[str, str] = Field(
        default={"PE": "appointments_pe", "CL": "appointments_cl"},
        description="Esquema de PostgreSQL por país (clave: código ISO)",
    )

    # Redis Settings (append store, queues and audit streams)
    REDIS_HOST: str = Field("localhost", description="Host de Redis")
    REDIS_PORT: int = Field(6379, description="Puerto de Redis")
    REDIS_DB: int = Field(0, description="Base de datos de Redis")
    REDIS_PASSWORD: str | None = Field(None, description="Contraseña de Redis")
    REDIS_KEY_PREFIX: str = Field("appointment", description="Prefijo de claves del append store")

    # arq queues; each country drains {APPOINTMENT_TOPIC_QUEUE}.{CC}
    APPOINTMENT_TOPIC_QUEUE: str = Field("appointments.topic", description="Cola base del tópico fan-out")
    COMPLETION_QUEUE: str = Field("appointments.completion", description="Cola de completado")

    # Redis Streams (audit only)
    EVENT_BUS_STREAM: str = Field("appointments.events", description="Stream del bus de eventos")
    DEAD_LETTER_STREAM: str = Field("appointments.dead-letter", description="Stream de mensajes fallidos")
    STREAM_MAX_LENGTH: int = Field(100_000, description="Longitud máxima aproximada de cada stream")

    # arq worker tuning
    WORKER_MAX_JOBS: int = Field(10, description="Jobs concurrentes por worker")
    JOB_TIMEOUT_S: int = Field(60, description="Tiempo máximo de ejecución de un job en segundos")
    JOB_KEEP_RESULT_S: int = Field(3600, description="Segundos que se conserva el resultado de un job")
    JOB_MAX_TRIES: int = Field(5, description="Intentos antes de enviar a dead-letter")
    JOB_RETRY_DELAY_S: float = Field(5.0, description="Espera base entre reintentos, multiplicada por el intento")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("COUNTRY_DB_SCHEMAS")
    @classmethod
    def validate_country_schemas(cls, v: dict[str, str]) -> dict[str, str]:
        normalized = {country.upper(): schema for country, schema in v.items()}
        missing = {"PE", "CL"} - set(normalized)
        if missing:
            raise ValueError(f"COUNTRY_DB_SCHEMAS is missing countries: {sorted(missing)}")
        return normalized

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("JOB_MAX_TRIES")
    @classmethod
    def validate_max_tries(cls, v):
        if v < 1:
            raise ValueError("JOB_MAX_TRIES must be at least 1")
        return v

    @computed_field
    @property
    def redis_url(self) -> str:
        """Construye la URL de conexión a Redis"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    def country_queue(self, country_iso: str) -> str:
        """Cola arq de un país: ``{topic}.{CC}``"""
        return f"{self.APPOINTMENT_TOPIC_QUEUE}.{country_iso.upper()}"


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
