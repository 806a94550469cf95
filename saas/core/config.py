"""
Configuration helpers for the Simple SaaS app.

Settings are read once from environment variables so that routers, services and
storage adapters never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

VARIANT_MINIMAL = "minimal"
VARIANT_THEMED = "themed"

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "storage.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    app_variant: str
    storage_backend: str
    data_file: Path
    database_url: str
    simulated_latency_ms: int
    log_level: str

    @property
    def themed(self) -> bool:
        return self.app_variant == VARIANT_THEMED

    @property
    def key_prefix(self) -> str:
        return "saas_v2_" if self.themed else "saas_"

    @property
    def users_key(self) -> str:
        return f"{self.key_prefix}users"

    @property
    def session_key(self) -> str:
        return f"{self.key_prefix}currentUser"

    @property
    def theme_key(self) -> str:
        return f"{self.key_prefix}darkMode"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    variant = (os.getenv("APP_VARIANT") or VARIANT_MINIMAL).strip().lower()
    if variant not in {VARIANT_MINIMAL, VARIANT_THEMED}:
        variant = VARIANT_MINIMAL
    default_latency = 600 if variant == VARIANT_THEMED else 0

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        app_variant=variant,
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_file=Path(os.getenv("DATA_FILE") or DEFAULT_DATA_FILE),
        database_url=os.getenv("DATABASE_URL", ""),
        simulated_latency_ms=max(0, _int(os.getenv("SIMULATED_LATENCY_MS"), default_latency)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
