"""
Configuration schema and loading for flowkit.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from flowkit.contracts.chat import ModelCapabilities


class ValidationSettings(BaseModel):
    """Graph validation behavior."""

    model_config = {"frozen": True}

    check_dangling_edges: bool = Field(
        default=False,
        description="Report the endpoints of edges whose source or target node is missing",
    )


class ChunkingSettings(BaseModel):
    """Defaults for splitting dataset text into chunks."""

    model_config = {"frozen": True}

    chunk_len: int = Field(default=512, gt=0, description="Target characters per chunk")
    overlap_ratio: float = Field(
        default=0.2,
        ge=0,
        lt=1,
        description="Fraction of chunk_len repeated at the start of the next chunk",
    )
    custom_reg: list[str] = Field(
        default_factory=list,
        description="Extra separator regexes tried before the built-in ones",
    )

    @field_validator("custom_reg")
    @classmethod
    def validate_patterns_compile(cls, v: list[str]) -> list[str]:
        """Reject separators that are not valid regular expressions."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid separator regex '{pattern}': {e}") from e
        return v


class HttpSettings(BaseModel):
    """HTTP readers used for links, external files and API datasets."""

    model_config = {"frozen": True}

    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")
    system_api_base_url: str | None = Field(
        default=None,
        description="Base URL of the service that reads feishu/yuque datasets",
    )


class FlowkitSettings(BaseModel):
    """Top-level flowkit configuration.

    Every section has defaults, so an empty settings file (or none at all)
    is valid.
    """

    model_config = {"frozen": True}

    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    models: dict[str, ModelCapabilities] = Field(
        default_factory=dict,
        description="Capability flags per chat model id",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only standard level names are accepted."""
        normalized = v.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{v}'")
        return normalized


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Unset variables without a default are left as written so the resulting
    validation error names them.
    """

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        default = match.group(2)
        if default is not None:
            return default
        return match.group(0)

    def expand(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        if isinstance(value, dict):
            return {k: expand(v) for k, v in value.items()}
        if isinstance(value, list):
            return [expand(item) for item in value]
        return value

    return {k: expand(v) for k, v in config.items()}


def load_settings(config_path: Path | None = None) -> FlowkitSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FLOWKIT_*) - highest priority
    2. Config file, if given
    3. Defaults from the Pydantic schema - lowest priority

    Environment variable format: FLOWKIT_VALIDATION__CHECK_DANGLING_EDGES for nested keys.

    Args:
        config_path: Path to YAML configuration file, or None for env + defaults only

    Returns:
        Validated FlowkitSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FLOWKIT",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf upper-cases top-level keys and mixes in its own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return FlowkitSettings(**_expand_env_vars(raw_config))
