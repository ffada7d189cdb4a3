"""Process configuration loaded from the environment and an optional ``.env`` file."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PINKFROG_", extra="ignore", populate_by_name=True)

    cms_dir: Path = Field(
        default_factory=Path.cwd,
        validation_alias=AliasChoices("CMS_DIR", "PINKFROG_CMS_DIR"),
        description="Site root holding src/ and dist/.",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    api_host: str = Field(default="127.0.0.1", description="Tool API host")
    api_port: int = Field(default=3001, ge=1, le=65535, description="Tool API port")
    preview_host: str = Field(default="127.0.0.1", description="Preview server host")
    preview_port: int = Field(default=8080, ge=1, le=65535, description="Default preview port")
    rate_limit: str = Field(
        default="30/minute",
        description="slowapi limit applied to destructive tools (empty_dist, copy_media, run_server).",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
