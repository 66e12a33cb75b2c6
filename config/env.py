"""Environment-driven settings for the box office project.

Values are read from ``BOXOFFICE_*`` environment variables or a ``.env`` file
and then exposed to Django through ``config.settings``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOXOFFICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: str = "django-insecure-boxoffice-dev-key"
    debug: bool = False
    allowed_hosts: str = "localhost,127.0.0.1"

    db_engine: str = "django.db.backends.sqlite3"
    db_name: str = str(BASE_DIR / "db.sqlite3")
    db_user: str = ""
    db_password: str = ""
    db_host: str = ""
    db_port: str = ""

    hold_minutes: int = Field(default=10, ge=1)

    log_level: str = "INFO"
    log_format: Literal["json", "plain"] = "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def allowed_host_list(self) -> list[str]:
        return [host.strip() for host in self.allowed_hosts.split(",") if host.strip()]

    @property
    def database(self) -> dict[str, str]:
        """Django DATABASES["default"] entry."""
        return {
            "ENGINE": self.db_engine,
            "NAME": self.db_name,
            "USER": self.db_user,
            "PASSWORD": self.db_password,
            "HOST": self.db_host,
            "PORT": self.db_port,
        }


env = Settings()
