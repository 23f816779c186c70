# lqy/config.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

# *** Override the default location at runtime:
# export LQY_CONFIG=~/work/.lqyconfig.yaml
DEFAULT_CONFIG_PATH = Path.home() / ".lqyconfig.yaml"


class Config(BaseModel):
    """Contents of the YAML config file.

    ``max_tokens`` caps the *response* length requested from the API; it has
    nothing to do with the input budget given by ``--max-tokens`` on the CLI.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: str
    model: str
    max_tokens: int = Field(..., gt=0)


def default_config_path() -> Path:
    env = os.getenv("LQY_CONFIG")
    return Path(env).expanduser() if env else DEFAULT_CONFIG_PATH


def load_config(path: Union[str, Path]) -> Config:
    """Read and validate the config file at *path*; raise ConfigError on any problem."""
    path = Path(path).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"malformed YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping with api_key, model and max_tokens")

    try:
        config = Config.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(map(str, err["loc"])) for err in exc.errors())
        raise ConfigError(f"invalid config in {path} ({fields}): {exc}") from exc

    logger.debug("Loaded config from %s (model=%s, max_tokens=%d)", path, config.model, config.max_tokens)
    return config
