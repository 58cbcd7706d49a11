"""
Pydantic v2 Configuration Models for DoiExtraction

Provides strict, typed configuration for the extraction subsystems:
- Strategy chain ordering and per-strategy enablement
- Scheduling delays (default and single-page-application hosts)
- Snapshot capture (parser, HTTP fetch settings for the CLI)
- Top-level DoiExtractionConfig as single source of truth

All models use extra="forbid" and are frozen. Environment variables and CLI
overrides follow: file < env < CLI precedence.
"""

from __future__ import annotations

from typing import ClassVar, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from DocsToDOI.DoiExtraction.snapshot import DEFAULT_USER_AGENT
from DocsToDOI.DoiExtraction.types import DEFAULT_STRATEGY_ORDER

# ============================================================================
# Strategy Models
# ============================================================================


class StrategyToggle(BaseModel):
    """Per-strategy switch."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = Field(default=True, description="Enable this strategy")


class StrategiesConfig(BaseModel):
    """Configuration for the strategy chain and its ordering."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    order: List[str] = Field(
        default_factory=lambda: list(DEFAULT_STRATEGY_ORDER),
        description="Strategy execution order (a subsequence of the canonical order)",
    )
    meta_tags: StrategyToggle = Field(default_factory=StrategyToggle, description="Meta tags")
    data_doi: StrategyToggle = Field(
        default_factory=StrategyToggle, description="data-doi attributes"
    )
    sciencedirect: StrategyToggle = Field(
        default_factory=StrategyToggle, description="ScienceDirect markup"
    )
    ieee: StrategyToggle = Field(default_factory=StrategyToggle, description="IEEE Xplore")
    nber: StrategyToggle = Field(default_factory=StrategyToggle, description="NBER papers")
    psycnet: StrategyToggle = Field(default_factory=StrategyToggle, description="APA PsycNET")
    pubmed: StrategyToggle = Field(default_factory=StrategyToggle, description="PubMed")
    title: StrategyToggle = Field(default_factory=StrategyToggle, description="Title text")

    @field_validator("order")
    @classmethod
    def validate_order(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("order must not be empty")
        unknown = [name for name in v if name not in DEFAULT_STRATEGY_ORDER]
        if unknown:
            raise ValueError(
                f"Unknown strategies: {unknown}. Must be in {list(DEFAULT_STRATEGY_ORDER)}"
            )
        if len(set(v)) != len(v):
            raise ValueError("order must not repeat strategies")
        positions = [DEFAULT_STRATEGY_ORDER.index(name) for name in v]
        if positions != sorted(positions):
            raise ValueError(
                "order may drop strategies but must not reorder them: "
                f"{list(DEFAULT_STRATEGY_ORDER)}"
            )
        return v

    def is_enabled(self, name: str) -> bool:
        toggle = getattr(self, name, None)
        return isinstance(toggle, StrategyToggle) and toggle.enabled

    def enabled_order(self) -> List[str]:
        return [name for name in self.order if self.is_enabled(name)]


# ============================================================================
# Scheduling & Capture Models
# ============================================================================


class SchedulingConfig(BaseModel):
    """Delay applied before the single extraction attempt per page load."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    default_delay_ms: int = Field(default=200, description="Delay for most hosts")
    long_delay_ms: int = Field(default=3000, description="Delay for client-rendered hosts")
    long_delay_hosts: List[str] = Field(
        default_factory=lambda: ["psycnet.apa.org"],
        description="Hostnames that render content after load (exact match)",
    )

    @field_validator("default_delay_ms", "long_delay_ms")
    @classmethod
    def validate_delays(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Delay values must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_long_delay(self) -> "SchedulingConfig":
        if self.long_delay_ms < self.default_delay_ms:
            raise ValueError("long_delay_ms must be >= default_delay_ms")
        return self


class SnapshotConfig(BaseModel):
    """Configuration for capturing page snapshots."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    parser: Literal["lxml", "html.parser"] = Field(
        default="lxml", description="BeautifulSoup parser"
    )
    timeout_s: float = Field(default=30.0, description="HTTP timeout when fetching URLs")
    polite_headers: Dict[str, str] = Field(
        default_factory=lambda: {"User-Agent": DEFAULT_USER_AGENT},
        description="Headers sent when fetching URLs",
    )

    @field_validator("timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_s must be > 0")
        return v


# ============================================================================
# Top-Level Configuration
# ============================================================================


class DoiExtractionConfig(BaseModel):
    """
    Single source of truth for DoiExtraction configuration.

    Loaded from file (YAML/JSON), overlaid with environment variables,
    and finally overridden by CLI arguments. Precedence: file < env < CLI.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    strategies: StrategiesConfig = Field(
        default_factory=StrategiesConfig, description="Strategy chain configuration"
    )
    scheduling: SchedulingConfig = Field(
        default_factory=SchedulingConfig, description="Scheduling delays"
    )
    snapshot: SnapshotConfig = Field(
        default_factory=SnapshotConfig, description="Snapshot capture configuration"
    )

    def config_hash(self) -> str:
        """
        Compute deterministic SHA256 hash of config for reproducibility.

        Returns:
            Hex-encoded SHA256 hash of normalized config JSON.
        """
        import hashlib
        import json

        normalized = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(normalized.encode()).hexdigest()
