"""
DoiExtraction Configuration Package

Public API for loading, validating, and introspecting DoiExtraction configuration.

Example:
    from DocsToDOI.DoiExtraction.config import load_config

    config = load_config(
        path="docstodoi.yaml",
        cli_overrides={"strategies": {"title": {"enabled": False}}},
    )
    config_id = config.config_hash()
"""

from .loader import (
    export_config_schema,
    load_config,
    validate_config_file,
)
from .models import (
    DoiExtractionConfig,
    SchedulingConfig,
    SnapshotConfig,
    StrategiesConfig,
    StrategyToggle,
)

__all__ = [
    # Models
    "DoiExtractionConfig",
    "StrategiesConfig",
    "StrategyToggle",
    "SchedulingConfig",
    "SnapshotConfig",
    # Loading/validation
    "load_config",
    "validate_config_file",
    "export_config_schema",
]
