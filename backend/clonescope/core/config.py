from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "technology_knowledge_base.json"


class Settings(BaseSettings):
    """Configuración centralizada del pipeline con validación de tipos."""

    model_config = SettingsConfigDict(
        env_prefix="CLONESCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_to_file: bool = True

    # Technology catalog (dataset de perfiles, se carga una sola vez)
    catalog_path: Path = Field(default=_DEFAULT_CATALOG_PATH)

    # Insights cache
    insights_cache_ttl_seconds: int = Field(default=86400, ge=60, le=604800)
    insights_cache_cleanup_interval_seconds: int = Field(default=3600, ge=1, le=86400)
    insights_cache_max_size: int = Field(default=5000, ge=1, le=100000)
    warm_cache_on_startup: bool = False

    # Insights generation
    insights_max_attempts: int = Field(default=2, ge=1, le=10)
    insights_retry_base_delay_seconds: float = Field(default=0.1, ge=0.0, le=10.0)
    insights_slow_generation_ms: float = Field(default=500.0, ge=1.0, le=60000.0)

    # Performance monitor
    monitor_max_samples: int = Field(default=1000, ge=10, le=100000)
    monitor_slow_threshold_ms: float = Field(default=10000.0, ge=1.0, le=600000.0)
    monitor_stats_log_interval: int = Field(default=50, ge=1, le=10000)


@lru_cache
def get_settings() -> Settings:
    """Singleton cacheado para evitar recargar .env en cada llamada."""
    return Settings()


settings = get_settings()
