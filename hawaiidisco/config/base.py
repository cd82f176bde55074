"""Base configuration model and TOML loader."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

ConfigT = TypeVar("ConfigT", bound="BaseConfig")


class BaseConfig(BaseModel):
    """Strict base model shared by every configuration section."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def load_config(model: type[ConfigT], path: Path) -> ConfigT:
    """Read ``path`` as TOML and validate it against ``model``."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open("rb") as fp:
        data = tomllib.load(fp)
    return model.model_validate(data)


__all__ = ["BaseConfig", "load_config"]
