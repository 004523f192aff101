from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    static_dir: Path = Path(__file__).parent / "static"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("port", mode="before")
    @classmethod
    def _empty_port(cls, value):
        # PORT= (set but empty) means the default
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_PORT
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
