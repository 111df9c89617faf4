from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR, DB_FILENAME, RATES_STALE_AFTER_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Unit Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "unitconv.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Exchange rates / caching
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4"
    rates_cache_key: str = "cached_exchange_rates"
    rates_stale_after_seconds: int = 14400  # 4 hours

    # Network timeouts: per operation and whole request
    http_timeout_seconds: float = 10.0
    http_total_timeout_seconds: float = 30.0
    http_retries: int = 1

    # Allowed: 'external-http' (live API), 'static' (fallback table only)
    exchange_rate_provider: str = "external-http"
    refresh_on_startup: bool = True

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        allowed = {"static", "external-http"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
