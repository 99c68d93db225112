# src/servergen/core/config.py
"""
Generator settings and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction. Without a settings
file or SERVERGEN_* variables the defaults reproduce the reference
generator's output exactly.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from servergen.contracts.enums import AdminPropagation

DEFAULT_PORT = 3000
DEFAULT_OUTPUT = Path("server.js")


class GeneratorSettings(BaseModel):
    """Top-level servergen configuration."""

    # Unknown keys are rejected so typos surface
    model_config = {"frozen": True, "extra": "forbid"}

    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        description="Port the generated server listens on",
    )
    default_output: Path = Field(
        default=DEFAULT_OUTPUT,
        description="Output file used when no destination is given",
    )
    admin_propagation: AdminPropagation = Field(
        default=AdminPropagation.DIRECT,
        description="direct: admin middleware protects the routes it targets; transitive: every route reachable via targets",
    )

    @field_validator("default_output")
    @classmethod
    def validate_default_output(cls, v: Path) -> Path:
        if not v.name:
            raise ValueError("default_output must name a file")
        return v


def _settings_file_keys(config_path: Path) -> frozenset[str]:
    """Parse the settings file up front so syntax errors surface as yaml errors."""
    content: Any = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if content is None:
        return frozenset()
    if not isinstance(content, Mapping):
        raise ValueError(f"Settings file must contain a mapping of keys, got {type(content).__name__}")
    return frozenset(str(key).lower() for key in content)


def load_settings(config_path: Path | None = None) -> GeneratorSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (SERVERGEN_*) - highest priority
    2. Config file, when given
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        config_path: Path to a YAML settings file, or None for env-only

    Returns:
        Validated GeneratorSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        yaml.YAMLError: If the settings file is not valid YAML
        ValueError: If the settings file is not a mapping
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    file_keys = _settings_file_keys(config_path) if config_path is not None else frozenset()

    dynaconf_settings = Dynaconf(
        envvar_prefix="SERVERGEN",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys plus its own bookkeeping. Keep the
    # schema fields (file or SERVERGEN_* env) and every key the file declared,
    # so a misspelled file key fails validation.
    raw_config = {
        key: value
        for key, value in ((k.lower(), v) for k, v in dynaconf_settings.as_dict().items())
        if key in GeneratorSettings.model_fields or key in file_keys
    }

    return GeneratorSettings(**raw_config)
