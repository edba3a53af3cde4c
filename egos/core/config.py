from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EGOS_", case_sensitive=False)

    go_command: str = "go"
    gofmt_command: str = "gofmt"
    workspace_prefix: str = "egos-"
    workspace_root: Path | None = None
    log_level: str = "info"
    log_format: str = "json"
    log_dir: Path | None = None


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
