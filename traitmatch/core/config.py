import os
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration class for environment variables and service settings.
    """
    # Service settings
    service_name: str = os.getenv("SERVICE_NAME", "traitmatch")
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "True").lower() == "true"

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Override log level for development
    if environment == "development":
        log_level = "DEBUG"

    # MongoDB settings
    mongodb: str = os.getenv("MONGODB", "mongodb://localhost:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "traitmatch")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # Collection names
    jobs_collection: str = os.getenv("JOBS_COLLECTION", "jobs")
    companies_collection: str = os.getenv("COMPANIES_COLLECTION", "companies")
    users_collection: str = os.getenv("USERS_COLLECTION", "users")
    messages_collection: str = os.getenv("MESSAGES_COLLECTION", "messages")

    # CORS settings
    cors_origins: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    cors_origin_regex: Optional[str] = os.getenv("CORS_ORIGIN_REGEX") or None

    # Metrics settings
    metrics_enabled: bool = os.getenv("METRICS_ENABLED", "False").lower() == "true"
    metrics_prefix: str = os.getenv("METRICS_PREFIX", "traitmatch")
    metrics_sample_rate: float = float(os.getenv("METRICS_SAMPLE_RATE", "1.0"))
    include_timing_header: bool = os.getenv("INCLUDE_TIMING_HEADER", "False").lower() == "true"

    # StatsD backend settings
    metrics_host: str = os.getenv("METRICS_STATSD_HOST", "127.0.0.1")
    metrics_port: int = int(os.getenv("METRICS_STATSD_PORT", "8125"))

    # Performance thresholds
    slow_request_threshold_ms: float = float(os.getenv("SLOW_REQUEST_THRESHOLD_MS", "1000.0"))

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origin_list(self) -> List[str]:
        """Comma separated CORS_ORIGINS as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()

__all__ = ["Settings", "settings"]
