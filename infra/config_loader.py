from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from infra.logging_config import get_logger

logger = get_logger(__name__)


# =========================
# CONFIG MODELS
# =========================


class LoggingConfig(BaseModel):
  """
  Diagnostics settings for the CLI.

  WARNING keeps the per-line parse failures quiet; DEBUG shows every
  line that ended up in the invalid bucket.
  """

  level: str = "WARNING"
  format: Literal["text", "json"] = "text"

  @field_validator("level")
  @classmethod
  def _known_level(cls, value: str) -> str:
    upper = value.upper()
    if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
      raise ValueError(f"unknown log level: {value}")
    return upper


class AppConfig(BaseModel):
  logging: LoggingConfig = LoggingConfig()


# =========================
# LOADER
# =========================

_DEFAULT_CONFIG_PATH = (
  Path(__file__).resolve().parents[1] / "config" / "default.yml"
)

_APP_CONFIG: Optional[AppConfig] = None


def _read_raw_yaml(path: Path) -> Dict[str, Any]:
  """Read YAML safely. Any failure yields an empty mapping."""
  try:
    with path.open("r", encoding="utf-8") as f:
      data = yaml.safe_load(f) or {}
  except FileNotFoundError:
    logger.debug(
      "Config file not found, using defaults",
      extra={"extra_data": {"config_path": str(path)}},
    )
    return {}
  except (OSError, yaml.YAMLError) as exc:
    logger.error(
      "Error reading config file, using defaults",
      extra={
        "extra_data": {
          "config_path": str(path),
          "error": str(exc),
        }
      },
    )
    return {}

  if not isinstance(data, dict):
    logger.error(
      "Config YAML root is not a mapping, falling back to defaults",
      extra={"extra_data": {"config_path": str(path)}},
    )
    return {}
  return data


def _override_with_env(section: Dict[str, Any]) -> Dict[str, Any]:
  merged = dict(section)
  if os.getenv("LOG_LEVEL"):
    merged["level"] = os.getenv("LOG_LEVEL")
  if os.getenv("LOG_FORMAT"):
    merged["format"] = os.getenv("LOG_FORMAT").lower()
  return merged


def load_config(path: Optional[Path] = None) -> AppConfig:
  """
  Load YAML config, apply LOG_LEVEL / LOG_FORMAT overrides, validate.

  - No file -> defaults.
  - Malformed file or values -> defaults, with an error logged.
  - The default path is cached; an explicit path is always re-read.
  """
  global _APP_CONFIG

  if _APP_CONFIG is not None and path is None:
    return _APP_CONFIG

  # Real environment variables win over .env entries
  load_dotenv(override=False)

  config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
  raw = _read_raw_yaml(config_path)

  logging_section = raw.get("logging", {})
  if not isinstance(logging_section, dict):
    logging_section = {}

  try:
    app_config = AppConfig(logging=LoggingConfig(**_override_with_env(logging_section)))
  except ValidationError as exc:
    logger.error(
      "Invalid config, using defaults",
      extra={
        "extra_data": {
          "config_path": str(config_path),
          "error": str(exc),
        }
      },
    )
    app_config = AppConfig()

  if path is None:
    _APP_CONFIG = app_config
  return app_config


def reset_config_cache() -> None:
  global _APP_CONFIG
  _APP_CONFIG = None
