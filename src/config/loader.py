"""YAML config file discovery and overlay.

Lookup order for `load_config`:
    1) an explicit path, if it exists,
    2) `miniparse.config.yaml` in the working directory,
    3) `default.yaml` at the project root,
    4) built-in defaults.

Example YAML:

    tokenizer:
      lowercase: true
      mergeSymbols: false
    pipeline:
      enableNormalization: true
      enableCleaning: true
      enableExtraction: true
      enableSegmentation: false
    extraction:
      extractEmails: true
      extractPhones: true
      extractUrls: true
      extractNumbers: true

The same mapping may also be nested under a top-level `miniparse` key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from src.config.settings import SECTION_NAMES, Settings, load_settings

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "miniparse.config.yaml"
DEFAULT_CONFIG_FILE_NAME = "default.yaml"
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class ConfigError(ValueError):
    """Raised when a config file cannot be read or does not describe valid settings."""


def _overlay_section(current: BaseModel, raw: Mapping[str, Any], *, section: str) -> BaseModel:
    model = type(current)
    values = current.model_dump()
    accepted: set[str] = set()

    for field_name, info in model.model_fields.items():
        keys = (info.alias, field_name) if info.alias else (field_name,)
        accepted.update(keys)
        for key in keys:
            if key in raw:
                values[field_name] = raw[key]
                break

    for key in raw:
        if key not in accepted:
            logger.warning("ignoring unknown config key=%s.%s", section, key)

    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"invalid '{section}' settings: {exc}") from exc


def overlay_settings(base: Settings, data: Mapping[str, Any]) -> Settings:
    """Overlay a partial settings mapping onto `base`, field by field.

    Sections and fields missing from `data` keep their values from `base`; unknown keys are
    ignored with a warning.

    Raises:
        ConfigError: If a section is not a mapping or a value fails validation.
    """

    if "miniparse" in data and isinstance(data["miniparse"], Mapping):
        data = data["miniparse"]

    for key in data:
        if key not in SECTION_NAMES:
            logger.warning("ignoring unknown config section=%s", key)

    updates: dict[str, BaseModel] = {}
    for section in SECTION_NAMES:
        raw = data.get(section)
        if raw is None:
            continue
        if not isinstance(raw, Mapping):
            raise ConfigError(f"config section '{section}' must be a mapping")
        updates[section] = _overlay_section(getattr(base, section), raw, section=section)

    return base.model_copy(update=updates)


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML config file into a plain mapping (an empty file reads as `{}`).

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return data


def find_config_file(config_path: str | Path | None = None, *, cwd: Path | None = None) -> Path | None:
    """Return the first existing config file in lookup order, or `None`."""

    candidates: list[Path] = []
    if config_path:
        candidates.append(Path(config_path))
    candidates.append((cwd or Path.cwd()) / CONFIG_FILE_NAME)
    candidates.append(PROJECT_ROOT / DEFAULT_CONFIG_FILE_NAME)

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: str | Path | None = None, *, cwd: Path | None = None) -> Settings:
    """Load settings: defaults and environment, overlaid with the first config file found.

    A config file that cannot be used is never fatal: the failure is logged as a warning and the
    defaults are returned instead.
    """

    base = load_settings()
    if config_path and not Path(config_path).is_file():
        logger.warning("config file not found path=%s", config_path)

    path = find_config_file(config_path, cwd=cwd)
    if path is None:
        return base

    try:
        settings = overlay_settings(base, read_config_file(path))
    except ConfigError as exc:
        logger.warning("falling back to default configuration reason=%s", exc)
        return base

    logger.debug("loaded config path=%s", path)
    return settings
