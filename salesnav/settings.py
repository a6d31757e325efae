# salesnav/settings.py
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="SalesNav Session API")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # search URL contract
    SEARCH_BASE_URL: str = Field(default="https://www.linkedin.com/sales/search")
    SESSION_PARAM: str = Field(default="sessionId")
    TOKEN_CODEC: str = Field(default="percent")
    FILTERS_PATH: str | None = None  # overrides the packaged filters.yaml

    # dev server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    RELOAD: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
