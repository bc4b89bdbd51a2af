"""Configuration model for costlens.

Holds the method whitelist: names of methods whose added or removed calls
must never trigger re-analysis on their own (cheap helpers the user knows
about, even if the analyzer reports them as non-constant).

Example:
    >>> from costlens.core.config import CostLensConfig
    >>> config = CostLensConfig(method_whitelist=["log"])
    >>> config.with_whitelisted("trace").method_whitelist
    ['log', 'trace']

"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from costlens.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Upper bound on config file size (1 MiB)
MAX_CONFIG_SIZE = 1024 * 1024


class CostLensConfig(BaseModel):
    """Configuration for change classification.

    Attributes:
        method_whitelist: Method names exempt from triggering a significant
            change. Loops are never exempt.

    """

    model_config = ConfigDict(frozen=True)

    method_whitelist: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("method_whitelist", "methodWhitelist"),
        description="Method names that should not trigger re-analysis",
    )

    @field_validator("method_whitelist", mode="after")
    @classmethod
    def normalize_whitelist(cls, v: list[str]) -> list[str]:
        """Strip names, drop blanks and duplicates (first occurrence wins)."""
        seen: dict[str, None] = {}
        for name in v:
            stripped = name.strip()
            if stripped:
                seen.setdefault(stripped, None)
        return list(seen)

    def with_whitelisted(self, method_name: str) -> CostLensConfig:
        """Return a copy with method_name added to the whitelist."""
        name = method_name.strip()
        if not name or name in self.method_whitelist:
            return self
        logger.debug("Whitelisting method %s", name)
        return CostLensConfig(method_whitelist=[*self.method_whitelist, name])

    def without_whitelisted(self, method_name: str) -> CostLensConfig:
        """Return a copy with method_name removed from the whitelist."""
        name = method_name.strip()
        if name not in self.method_whitelist:
            return self
        logger.debug("Removing method %s from whitelist", name)
        return CostLensConfig(
            method_whitelist=[m for m in self.method_whitelist if m != name]
        )


def load_config(path: Path) -> CostLensConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated CostLensConfig. An empty file yields the defaults.

    Raises:
        ConfigError: On file/parse/validation errors.

    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config {path} exceeds 1MB limit")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return CostLensConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be YAML mapping, got {type(data).__name__}")

    try:
        return CostLensConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
