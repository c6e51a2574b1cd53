"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    DEBUG = _env_flag("DEBUG")

    # Backends
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory").lower()  # memory | prisma
    LOCK_BACKEND: str = os.getenv("LOCK_BACKEND", "memory").lower()  # memory | redis

    # Postgresql Database settings (STORE_BACKEND=prisma)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Redis settings (LOCK_BACKEND=redis)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    LOCK_TIMEOUT_SECONDS: float = float(os.getenv("LOCK_TIMEOUT_SECONDS", "10"))
    LOCK_BLOCKING_TIMEOUT_SECONDS: float = float(
        os.getenv("LOCK_BLOCKING_TIMEOUT_SECONDS", "5")
    )

    # Chat settings
    TYPING_TTL_SECONDS: float = float(os.getenv("TYPING_TTL_SECONDS", "3"))
    USER_SEARCH_LIMIT: int = int(os.getenv("USER_SEARCH_LIMIT", "100"))

    # Auth
    SERVICE_AUTH_SECRET = os.getenv("SERVICE_AUTH_SECRET", "")
    SERVICE_AUTH_ISSUER = os.getenv("SERVICE_AUTH_ISSUER", "your_service_name")
    SERVICE_AUTH_AUDIENCE = os.getenv("SERVICE_AUTH_AUDIENCE", "your_service_audience")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s [%(levelname)s] %(name)s [%(correlation_id)s] %(message)s",
    )

    # CORS
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]
