"""YAML config loader with environment and CLI overrides."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from forecaster.config.schema import ForecastConfig
from forecaster.errors import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "FORECASTER_API_KEY"
API_KEY_FIELDS = ("api_key", "yandex.api.key")


def load_config(
    path: str | Path,
    *,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ForecastConfig:
    """Load and validate config from a YAML file.

    The API key may come from the file or from FORECASTER_API_KEY, which
    wins when set. Non-None ``overrides`` replace file values. Every failure
    is raised as ConfigurationError.
    """
    raw = _read_yaml(Path(path))
    env = os.environ if environ is None else environ

    env_key = env.get(API_KEY_ENV_VAR, "").strip()
    if env_key:
        for field in API_KEY_FIELDS:
            raw.pop(field, None)
        raw["api_key"] = env_key
        logger.debug("Using API key from %s", API_KEY_ENV_VAR)

    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    if not _has_api_key(raw):
        raise ConfigurationError(
            f"API key not found in {path} "
            f"(set api_key or the {API_KEY_ENV_VAR} environment variable)"
        )

    try:
        config = ForecastConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {path}: {_describe_errors(e)}"
        ) from e

    logger.info(
        "Loaded config from %s: lat=%s lon=%s days=%d",
        path, config.latitude, config.longitude, config.days,
    )
    return config


def mask_secret(value: str) -> str:
    """Hide all but the last 4 characters of a secret."""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def config_as_dict(config: ForecastConfig) -> dict[str, Any]:
    """Dump the config for display, with the API key masked."""
    data = config.model_dump(mode="json")
    data["api_key"] = mask_secret(config.api_key)
    return data


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file {path} is not valid YAML: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {path} must be a mapping of keys to values"
        )
    return raw


def _has_api_key(raw: Mapping[str, Any]) -> bool:
    for field in API_KEY_FIELDS:
        value = raw.get(field)
        if value is not None and str(value).strip():
            return True
    return False


def _describe_errors(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
