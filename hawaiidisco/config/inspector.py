"""Validation report for configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

from pydantic import ValidationError

from .app import AppConfig
from .base import load_config
from .utils import env_reference_name


class ConfigInspectionError(RuntimeError):
    """Raised when configuration inspection fails unexpectedly."""


def check_config(path: Path, *, config_cls: type[AppConfig] = AppConfig) -> tuple[dict[str, Any], int, AppConfig | None]:
    """Validate the configuration file and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, config_instance_or_None)``.
    """

    try:
        config = load_config(config_cls, path)
    except FileNotFoundError as exc:
        return _error(path, "missing_file", str(exc)), 2, None
    except ValidationError as exc:
        result = _error(path, "validation_error", "Configuration validation failed")
        result["error"]["details"] = [
            {
                "loc": _format_error_location(err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return result, 3, None
    except PermissionError as exc:
        return _error(path, "permission_error", str(exc)), 2, None
    except ValueError as exc:
        # tomllib.TOMLDecodeError is a ValueError
        return _error(path, "invalid_format", str(exc)), 1, None
    except Exception as exc:  # pragma: no cover - unexpected failures
        raise ConfigInspectionError("Unexpected configuration inspection error") from exc

    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(config),
    }
    return result, 0, config


def _error(path: Path, kind: str, message: str) -> dict[str, Any]:
    return {
        "status": "error",
        "config_path": str(path),
        "error": {
            "type": kind,
            "message": message,
        },
    }


def _format_error_location(location: Iterable[Union[int, str]]) -> str:
    return ".".join(str(part) for part in location)


def _collect_warnings(config: AppConfig) -> list[str]:
    warnings: list[str] = []

    db_path = Path(config.db_path).expanduser()
    if not db_path.exists():
        warnings.append(f"Database file does not exist yet: {db_path}")
    if not config.llm.base_url.lower().startswith("stub://") and not config.llm.api_key_secret:
        var_name = env_reference_name(config.llm.api_key)
        source = f"{var_name} is unset" if var_name else "llm.api_key is empty"
        warnings.append(f"No Anthropic API key configured ({source}); digest generation will fail")
    if config.digest.max_articles > 200:
        warnings.append("'digest.max_articles' above 200 produces very long prompts")

    return warnings


__all__ = ["check_config", "ConfigInspectionError"]
