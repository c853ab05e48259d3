from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(str, Enum):
    DEV = "dev"
    HML = "hml"
    PROD = "prod"


class Settings(BaseSettings):
    APP_ENV: Env = Env.DEV
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./school.db"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Comma-separated CORS origins; empty allows any origin
    ALLOWED_HOSTS: str = ""

    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def expose_error_details(self) -> bool:
        return self.DEBUG or self.APP_ENV == Env.DEV


# global instance
settings = Settings()
