"""Configuration for PromptSmith builders.

Configuration is loaded with precedence:
1. Environment variables (highest)
2. Project config (.promptsmith/config.json)
3. User profile (~/.promptsmith/profiles/<name>.json)
4. Defaults (lowest)

Builders never read these sources on their own; pass the result of
``load_config()`` to ``create_prompt_builder()`` explicitly.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from promptsmith.core.exceptions import ConfigurationError
from promptsmith.core.types import PromptFormat
from promptsmith.core.validation import ValidatorConfig


@dataclass
class PromptSmithConfig:
    """Defaults applied to new builders."""

    default_format: str = PromptFormat.MARKDOWN.value
    validator: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        self.default_format = PromptFormat.parse(self.default_format).value
        if not isinstance(self.validator, dict):
            raise ConfigurationError(
                f"validator must be a mapping, got {type(self.validator).__name__}",
                key="validator",
            )

    @property
    def prompt_format(self) -> PromptFormat:
        return PromptFormat(self.default_format)

    @property
    def validator_config(self) -> ValidatorConfig:
        return ValidatorConfig.from_dict(self.validator)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PromptSmithConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def _load_file(path: Path, label: str) -> PromptSmithConfig:
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {label}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load {label}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{label} must contain a JSON object")
    return PromptSmithConfig.from_dict(data)


def load_user_config(profile_name: str = "default") -> PromptSmithConfig:
    """Load user configuration from ~/.promptsmith/profiles/<name>.json.

    Args:
        profile_name: Name of profile to load (default: "default")

    Returns:
        Config loaded from profile, or default config if not found

    Raises:
        ConfigurationError: If profile file is invalid
    """
    profile_path = Path.home() / ".promptsmith" / "profiles" / f"{profile_name}.json"
    if not profile_path.exists():
        return PromptSmithConfig()
    return _load_file(profile_path, f"profile {profile_name}")


def load_project_config(project_root: Path | None = None) -> PromptSmithConfig | None:
    """Load project-specific configuration from .promptsmith/config.json.

    Args:
        project_root: Directory containing .promptsmith/ (default: current directory)

    Returns:
        Config if the file exists, None otherwise

    Raises:
        ConfigurationError: If config file is invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / ".promptsmith" / "config.json"
    if not config_path.exists():
        return None
    return _load_file(config_path, "project config")


def load_env_overrides() -> dict[str, Any]:
    """Load configuration overrides from environment variables.

    Supported environment variables:
    - PROMPTSMITH_FORMAT: default prompt format (markdown, toon, compact)

    Returns:
        Dictionary of configuration overrides
    """
    overrides: dict[str, Any] = {}

    if prompt_format := os.getenv("PROMPTSMITH_FORMAT"):
        overrides["default_format"] = PromptFormat.parse(prompt_format).value

    return overrides


def merge_configs(
    base: PromptSmithConfig,
    project: PromptSmithConfig | None = None,
    env_overrides: dict[str, Any] | None = None,
) -> PromptSmithConfig:
    """Merge configurations with precedence: env > project > base.

    Args:
        base: Base configuration (typically from user profile)
        project: Project-specific configuration (optional)
        env_overrides: Environment variable overrides (optional)

    Returns:
        Merged configuration
    """
    merged = base.to_dict()
    defaults = PromptSmithConfig().to_dict()

    if project:
        for key, value in project.to_dict().items():
            # Validator switches merge key by key
            if key == "validator":
                merged.setdefault("validator", {}).update(value)
            elif value != defaults.get(key):
                merged[key] = value

    if env_overrides:
        merged.update(env_overrides)

    return PromptSmithConfig.from_dict(merged)


def load_config(
    profile_name: str = "default", project_root: Path | None = None
) -> PromptSmithConfig:
    """Load and merge all configuration sources.

    Raises:
        ConfigurationError: If any config source is invalid
    """
    return merge_configs(
        load_user_config(profile_name),
        load_project_config(project_root),
        load_env_overrides(),
    )
