"""
Layered loading of DoiExtractionConfig.

Sources are applied in order, later ones winning:

1. an optional YAML (``.yaml``/``.yml``) or JSON file,
2. ``DOCSTODOI_*`` environment variables,
3. overrides passed by the caller (the CLI).

Environment keys map onto config paths with ``__`` between levels, so
``DOCSTODOI_STRATEGIES__PUBMED__ENABLED=false`` disables the PubMed strategy.
Values are read as JSON where possible (``3000``, ``false``, ``["a.org"]``).
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .models import DoiExtractionConfig

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "DOCSTODOI_"


def _read_file(path: str) -> dict[str, Any]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read config file {path}: {e}") from e

    try:
        if p.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        elif p.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            raise ValueError(f"Unsupported config format {p.suffix!r}; use .yaml or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def _env_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _apply_env(data: dict[str, Any], env_prefix: str) -> None:
    for env_key, raw in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue
        path = env_key[len(env_prefix) :].lower().split("__")
        # DOCSTODOI_CONFIG names the file itself
        if path[0] not in DoiExtractionConfig.model_fields:
            continue

        node = data
        for key in path[:-1]:
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[path[-1]] = _env_value(raw)
        _LOGGER.debug("Environment override %s -> %s", env_key, ".".join(path))


def _apply_overrides(data: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(data.get(key), dict):
            data[key] = _apply_overrides(data[key], value)
        else:
            data[key] = value
    return data


def load_config(
    path: str | None = None,
    env_prefix: str = ENV_PREFIX,
    cli_overrides: Mapping[str, Any] | None = None,
) -> DoiExtractionConfig:
    """
    Build the effective configuration from file, environment and overrides.

    Args:
        path: Optional YAML/JSON config file.
        env_prefix: Prefix of environment variables to apply.
        cli_overrides: Nested mapping applied last.

    Raises:
        ValueError: If the file cannot be read or the merged config is invalid
            (pydantic's ``ValidationError`` is a ``ValueError``).
    """
    data: dict[str, Any] = _read_file(path) if path else {}
    _apply_env(data, env_prefix)
    if cli_overrides:
        _apply_overrides(data, cli_overrides)

    try:
        config = DoiExtractionConfig.model_validate(data)
    except ValueError as e:
        _LOGGER.error(f"Invalid DOI extraction config: {e}")
        raise
    _LOGGER.debug(f"Loaded config {config.config_hash()[:8]} (file={path})")
    return config


def validate_config_file(path: str) -> bool:
    """Return ``True`` if ``path`` loads cleanly; raise ``ValueError`` otherwise."""
    load_config(path=path)
    return True


def export_config_schema(output_file: str | None = None) -> dict[str, Any]:
    """Return the JSON Schema of DoiExtractionConfig, optionally writing it out."""
    schema = DoiExtractionConfig.model_json_schema()
    if output_file:
        Path(output_file).write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return schema
