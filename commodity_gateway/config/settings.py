import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _first_env(*names: str, default: str = "") -> str:
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return default


class Settings(BaseModel):
    ALPHAVANTAGE_API_KEY: str = ""
    ALPHAVANTAGE_BASE_URL: str = "https://www.alphavantage.co/query"
    ALPHAVANTAGE_TIMEOUT_SEC: float = Field(default=10.0, gt=0)
    COMMODITY_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    COMMODITY_FETCH_WORKERS: int = Field(default=7, ge=1)

    @classmethod
    def from_env(cls) -> "Settings":
        raw_origins = os.getenv("COMMODITY_CORS_ORIGINS", "*")
        origins = [s.strip() for s in raw_origins.split(",") if s.strip()]
        if not origins:
            origins = ["*"]

        return cls.model_validate(
            {
                # VITE_* names are what the dashboard deployment already exports
                "ALPHAVANTAGE_API_KEY": _first_env(
                    "ALPHAVANTAGE_API_KEY", "VITE_ALPHAVANTAGEAPI", "ALPHAVANTAGEAPI"
                ),
                "ALPHAVANTAGE_BASE_URL": _first_env(
                    "ALPHAVANTAGE_BASE_URL", default="https://www.alphavantage.co/query"
                ),
                "ALPHAVANTAGE_TIMEOUT_SEC": os.getenv("ALPHAVANTAGE_TIMEOUT_SEC", "10"),
                "COMMODITY_CORS_ORIGINS": origins,
                "COMMODITY_FETCH_WORKERS": os.getenv("COMMODITY_FETCH_WORKERS", "7"),
            }
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
