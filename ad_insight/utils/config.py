"""Configuration loader with TOML support and environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.toml"
ENV_PREFIX = "AD_INSIGHT_"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from TOML file, with environment variable overrides."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "rb") as f:
        config = tomllib.load(f)

    _apply_env_overrides(config)
    return config


def _apply_env_overrides(config: dict[str, Any]) -> None:
    """Override config values with AD_INSIGHT_ prefixed environment variables.

    Example: AD_INSIGHT_GENERATOR_MAX_RETRIES=5 overrides config["generator"]["max_retries"]

    Key names may themselves contain underscores, so matching is greedy
    against the keys actually present in the config.
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        remainder = key[len(ENV_PREFIX) :].lower()
        _set_nested_greedy(config, remainder, value)


def _set_nested_greedy(d: dict, remainder: str, value: str) -> None:
    if not remainder:
        return

    # Longest key first so "max_tokens" wins over a hypothetical "max"
    for config_key in sorted(d.keys(), key=len, reverse=True):
        prefix = config_key.lower()
        if remainder == prefix:
            existing = d[config_key]
            if isinstance(existing, dict):
                continue  # a section can't take a scalar
            d[config_key] = _cast_value(value, type(existing))
            return
        elif remainder.startswith(prefix + "_"):
            child = d[config_key]
            if isinstance(child, dict):
                _set_nested_greedy(child, remainder[len(prefix) + 1 :], value)
                return


def _cast_value(value: str, target_type: type) -> Any:
    if target_type is bool:
        return value.lower() in ("true", "1", "yes")
    if target_type is int:
        return int(value)
    if target_type is float:
        return float(value)
    return value
