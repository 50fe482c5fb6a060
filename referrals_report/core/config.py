from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from referrals_report.core.chains import DEFAULT_REFERRALS_SUBGRAPH_URLS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # JSON object in the environment, e.g. {"42161": "https://..."}
    referrals_subgraph_urls: dict[int, str] = Field(
        default_factory=lambda: dict(DEFAULT_REFERRALS_SUBGRAPH_URLS),
        alias="REFERRALS_SUBGRAPH_URLS",
    )
    subgraph_http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        alias="SUBGRAPH_HTTP_TIMEOUT_SECONDS",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
