# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "rota-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    # Empty URL disables assignment notifications entirely.
    NOTIFICATION_SERVICE_URL: str = os.getenv("NOTIFICATION_SERVICE_URL", "")
    NOTIFICATION_TIMEOUT: float = float(os.getenv("NOTIFICATION_TIMEOUT", "3.0"))

    WEEK_FINDER_MAX_WEEKS: int = int(os.getenv("WEEK_FINDER_MAX_WEEKS", "8"))
    DEFAULT_FAIRNESS_STRATEGY: str = os.getenv(
        "DEFAULT_FAIRNESS_STRATEGY", "load_balancing"
    )
    MAX_PLAN_DAYS: int = int(os.getenv("MAX_PLAN_DAYS", "366"))
    DEFAULT_HISTORY_LIMIT: int = int(os.getenv("DEFAULT_HISTORY_LIMIT", "500"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SEED_DEFAULT_ROSTER: bool = (
        os.getenv("SEED_DEFAULT_ROSTER", "true").lower() == "true"
    )


settings = Settings()
