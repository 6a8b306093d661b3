from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECIPE_FINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = None
    api_url: str = "https://api.spoonacular.com"
    request_timeout: float = 20
    db_driver: str = "sqlite+aiosqlite"
    db_host: str = "127.0.0.1:3306"
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "recipe_finder"
    db_url: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        if self.db_driver.startswith("sqlite"):
            return f"{self.db_driver}:///{self.db_name}.db"
        return (
            f"{self.db_driver}://{self.db_user}:{self.db_password}"
            f"@{self.db_host}/{self.db_name}"
        )
