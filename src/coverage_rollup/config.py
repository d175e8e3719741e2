"""Configuration system for coverage-rollup.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./.coverage-rollup.json)
4. Global config (~/.coverage_rollup.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from coverage_rollup.formula.coverage.formulas import DEFAULT_DECIMAL_SCALE, FORMULAS

logger = logging.getLogger(__name__)

# Valid values for enums
VALID_OUTPUT_FORMATS = ("ascii", "json")
MAX_DECIMAL_SCALE = 6

# Hardcoded defaults
DEFAULT_OUTPUT_FORMAT = "ascii"

# Config file names
GLOBAL_CONFIG_FILENAME = ".coverage_rollup.json"
PROJECT_CONFIG_FILENAME = ".coverage-rollup.json"

# Environment variable names
ENV_FORMULAS = "COVERAGE_ROLLUP_FORMULAS"
ENV_DECIMAL_SCALE = "COVERAGE_ROLLUP_DECIMAL_SCALE"
ENV_OUTPUT_FORMAT = "COVERAGE_ROLLUP_OUTPUT_FORMAT"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(Exception):
    """Raised when configuration file cannot be loaded."""

    pass


def _check_unknown_fields(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls) if f.name != "explicit"}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


@dataclass
class FormulasConfig:
    """Which formulas run and how their percentages are rounded.

    `enabled` of None means every registered formula.
    """

    enabled: list[str] | None = None
    decimal_scale: int = DEFAULT_DECIMAL_SCALE
    # keys present in the source file, so an explicit default still overrides
    explicit: frozenset[str] = field(default=frozenset(), repr=False, compare=False)

    def validate(self) -> None:
        if self.enabled is not None:
            unknown = [name for name in self.enabled if name not in FORMULAS]
            if unknown:
                raise ConfigValidationError(
                    f"Invalid formula(s) '{', '.join(unknown)}'. "
                    f"Valid values: {', '.join(FORMULAS)}"
                )
            duplicates = sorted({name for name in self.enabled if self.enabled.count(name) > 1})
            if duplicates:
                raise ConfigValidationError(
                    f"Formula(s) listed more than once: {', '.join(duplicates)}"
                )
        if not 0 <= self.decimal_scale <= MAX_DECIMAL_SCALE:
            raise ConfigValidationError(
                f"decimal_scale must be between 0 and {MAX_DECIMAL_SCALE}, "
                f"got {self.decimal_scale}"
            )

    def resolve_enabled(self) -> list[str]:
        if self.enabled is None:
            return list(FORMULAS)
        return list(self.enabled)

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {"enabled": self.enabled, "decimal_scale": self.decimal_scale}
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "FormulasConfig":
        if strict:
            _check_unknown_fields(cls, data, "formulas")
        enabled = data.get("enabled")
        return cls(
            enabled=list(enabled) if enabled is not None else None,
            decimal_scale=data.get("decimal_scale", DEFAULT_DECIMAL_SCALE),
            explicit=frozenset(data),
        )


@dataclass
class OutputConfig:
    format: str = DEFAULT_OUTPUT_FORMAT
    depth: int | None = None
    explicit: frozenset[str] = field(default=frozenset(), repr=False, compare=False)

    def validate(self) -> None:
        if self.format not in VALID_OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Invalid output format '{self.format}'. "
                f"Valid values: {', '.join(VALID_OUTPUT_FORMATS)}"
            )
        if self.depth is not None and self.depth < 0:
            raise ConfigValidationError(
                f"depth must be zero or positive, got {self.depth}"
            )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {"format": self.format, "depth": self.depth}
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "OutputConfig":
        if strict:
            _check_unknown_fields(cls, data, "output")
        return cls(
            format=data.get("format", DEFAULT_OUTPUT_FORMAT),
            depth=data.get("depth"),
            explicit=frozenset(data),
        )


@dataclass
class RollupConfig:
    """Complete coverage-rollup configuration."""

    version: str = "1"
    formulas: FormulasConfig = field(default_factory=FormulasConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Validate entire configuration."""
        self.formulas.validate()
        self.output.validate()

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        return {
            "version": self.version,
            "formulas": self.formulas.to_dict(exclude_none),
            "output": self.output.to_dict(exclude_none),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "RollupConfig":
        if strict:
            _check_unknown_fields(cls, data, "top-level")
        return cls(
            version=str(data.get("version", "1")),
            formulas=FormulasConfig.from_dict(data.get("formulas", {}), strict=strict),
            output=OutputConfig.from_dict(data.get("output", {}), strict=strict),
        )


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / GLOBAL_CONFIG_FILENAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file (current directory by default)."""
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_FILENAME


def load_config_file(path: Path, strict: bool = False) -> RollupConfig:
    """Load configuration from a JSON file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        RollupConfig instance (defaults if the file does not exist)

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return RollupConfig()

    try:
        content = path.read_text()
    except PermissionError as e:
        raise ConfigLoadError(f"Permission denied reading {path}: {e}")
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config {path} must contain a JSON object")

    logger.debug("Loaded config file %s", path)
    return RollupConfig.from_dict(data, strict=strict)


def merge_configs(*configs: RollupConfig) -> RollupConfig:
    """Merge multiple configs with later configs taking precedence.

    A later value overrides an earlier one when it differs from the
    default or was set explicitly in its file, so partial configs layer
    properly.

    Args:
        *configs: Configs to merge (first is base, last has highest priority)

    Returns:
        Merged RollupConfig
    """
    if not configs:
        return RollupConfig()

    result = copy.deepcopy(configs[0])

    for config in configs[1:]:
        if config.formulas.enabled is not None or "enabled" in config.formulas.explicit:
            enabled = config.formulas.enabled
            result.formulas.enabled = list(enabled) if enabled is not None else None
        if (
            config.formulas.decimal_scale != DEFAULT_DECIMAL_SCALE
            or "decimal_scale" in config.formulas.explicit
        ):
            result.formulas.decimal_scale = config.formulas.decimal_scale

        if config.output.format != DEFAULT_OUTPUT_FORMAT or "format" in config.output.explicit:
            result.output.format = config.output.format
        if config.output.depth is not None or "depth" in config.output.explicit:
            result.output.depth = config.output.depth

    return result


def apply_env_overrides(config: RollupConfig) -> RollupConfig:
    """Apply environment variable overrides to config.

    Args:
        config: Base configuration

    Returns:
        New config with env var overrides applied

    Raises:
        ConfigValidationError: If env var value is invalid
    """
    result = copy.deepcopy(config)

    if formulas := os.environ.get(ENV_FORMULAS):
        result.formulas.enabled = [name.strip() for name in formulas.split(",") if name.strip()]

    if scale := os.environ.get(ENV_DECIMAL_SCALE):
        try:
            result.formulas.decimal_scale = int(scale)
        except ValueError:
            raise ConfigValidationError(
                f"Invalid {ENV_DECIMAL_SCALE} value '{scale}': must be an integer"
            )

    if output_format := os.environ.get(ENV_OUTPUT_FORMAT):
        result.output.format = output_format

    return result


def get_config(
    project_dir: Path | None = None,
    config_path: Path | None = None,
) -> RollupConfig:
    """Get the effective configuration, merged from all sources.

    Args:
        project_dir: Directory holding the project config (default: cwd)
        config_path: Explicit config file; replaces the project config

    Returns:
        Validated, merged RollupConfig
    """
    global_config = load_config_file(get_global_config_path())
    project_config = load_config_file(config_path or get_project_config_path(project_dir))

    config = apply_env_overrides(merge_configs(RollupConfig(), global_config, project_config))
    config.validate()
    return config


def generate_config_template() -> dict[str, Any]:
    """Generate a config template with every option at its default."""
    return {
        "version": "1",
        "formulas": {
            "enabled": list(FORMULAS),
            "decimal_scale": DEFAULT_DECIMAL_SCALE,
        },
        "output": {
            "format": DEFAULT_OUTPUT_FORMAT,
            "depth": None,
        },
    }
