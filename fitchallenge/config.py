from __future__ import annotations
import os
from datetime import date
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "fitchallenge-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "Fitness Challenge")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "true").lower() in ("1", "true", "yes")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/fitchallenge_dev")
    store_backend: str = os.getenv("STORE_BACKEND", "sql")  # sql|memory

    # Challenge window (inclusive) and the timezone "today" is evaluated in
    challenge_start: date = date.fromisoformat(os.getenv("CHALLENGE_START", "2025-01-19"))
    challenge_end: date = date.fromisoformat(os.getenv("CHALLENGE_END", "2025-03-01"))
    challenge_tz: str = os.getenv("CHALLENGE_TZ", "UTC")

    # Workout proof references
    media_base_url: str = os.getenv("MEDIA_BASE_URL", "http://minio:9000/workout-proofs")

    upsert_retries: int = int(os.getenv("UPSERT_RETRIES", "2"))

settings = Settings()
