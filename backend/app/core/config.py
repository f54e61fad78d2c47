from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.app.services.currency import is_supported_currency


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./petro_backoffice.db"
    SECRET_KEY: str = "dev-insecure-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    LOG_LEVEL: str = "INFO"

    # Reports
    DEFAULT_CURRENCY: str = "PKR"
    AGING_GROUP_BY_CURRENCY: bool = False

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def currency_supported(cls, v: str) -> str:
        if not is_supported_currency(v):
            raise ValueError(f"Unsupported currency: {v}")
        return v.upper()


settings = Settings()
