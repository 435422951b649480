"""Centralized configuration management for the provider selector."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ScoringConfig(BaseModel):
    """Settings for the weighted-average scorer."""
    neutral_metric_value: float = Field(
        50.0,
        ge=0,
        le=100,
        description="Value used when a provider does not define a requested metric"
    )


class ReasoningConfig(BaseModel):
    """Settings for reasoning text generation."""
    delimiter: str = Field(
        " | ",
        description="Separator placed between reasoning fragments"
    )


class OutputConfig(BaseModel):
    """Settings for the analysis payload."""
    score_decimals: int = Field(
        2,
        ge=0,
        le=6,
        description="Decimal places used for scores in the ranking list"
    )


class LoggingConfig(BaseModel):
    """Logging settings for the CLI."""
    level: str = Field("WARNING", description="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    rich: bool = Field(True, description="Use Rich console output for log records")


class SelectorConfig(BaseModel):
    """Complete configuration for the provider selector."""
    catalog_path: Optional[str] = Field(
        None,
        description="Provider catalog file (JSON or YAML). Built-in catalog when unset"
    )
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    reasoning: ReasoningConfig = Field(default_factory=ReasoningConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


CONFIG_ENV_VAR = "PROVIDER_SELECTOR_CONFIG"
LOCAL_CONFIG_NAMES = ("selector-config.yaml", "selector-config.yml")
USER_CONFIG_PARTS = (".config", "provider-selector", "config.yaml")

# Global config instance
_config: Optional[SelectorConfig] = None


def get_config() -> SelectorConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = SelectorConfig()
    return _config


def load_config(path: Path) -> SelectorConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded SelectorConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = SelectorConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = SelectorConfig()


def config_search_order() -> list[str]:
    """Human-readable config locations, in the order find_config_file tries them."""
    return (
        [f"{CONFIG_ENV_VAR} environment variable"]
        + [f"./{name} (current directory)" for name in LOCAL_CONFIG_NAMES]
        + ["~/" + "/".join(USER_CONFIG_PARTS)]
    )


def find_config_file() -> Optional[Path]:
    """Find a selector configuration file, following config_search_order()."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in LOCAL_CONFIG_NAMES:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home().joinpath(*USER_CONFIG_PARTS)
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Write the default configuration as YAML, creating parent directories."""
    data = SelectorConfig().model_dump()
    header = "# Provider Selector Configuration (generated by provider-selector init-config)\n\n"

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(header)
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
