import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel

ENV_SOURCE = "WORSHIPSHEET_SOURCE"


class AppConfig(BaseModel):
    source: str = "songs.json"  # JSON file path or http(s) API base URL
    api_timeout: float = 15.0
    default_limit: int = 5
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load settings from a YAML file, then apply environment overrides."""
    data: dict = {}
    if path is not None:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if os.environ.get(ENV_SOURCE):
        data["source"] = os.environ[ENV_SOURCE]
    return AppConfig(**data)
