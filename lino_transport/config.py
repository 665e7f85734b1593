"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NODE_URL = "localhost:26657"
DEFAULT_CONFIG_PATH = Path.home() / ".lino-go" / "config.yaml"

# ---------------------------------------------------------------------------
# Frozen config dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportConfig:
    node_url: str = DEFAULT_NODE_URL
    chain_id: str = ""
    query_timeout: float = 5.0
    rpc_timeout: float = 60.0


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")

# Environment variables that override values read from the file.
_ENV_OVERRIDES: dict[str, str] = {
    "node_url": "LINO_NODE_URL",
    "chain_id": "LINO_CHAIN_ID",
    "query_timeout": "LINO_QUERY_TIMEOUT",
    "rpc_timeout": "LINO_RPC_TIMEOUT",
}


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    merged = dict(raw)
    for key, env_name in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            merged[key] = env_value
    return merged


# ---------------------------------------------------------------------------
# YAML → dataclass builder
# ---------------------------------------------------------------------------


def _build_transport(raw: dict[str, Any]) -> TransportConfig:
    try:
        return TransportConfig(
            node_url=str(raw.get("node_url") or DEFAULT_NODE_URL),
            chain_id=str(raw.get("chain_id", "")),
            query_timeout=float(raw.get("query_timeout", 5.0)),
            rpc_timeout=float(raw.get("rpc_timeout", 60.0)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid transport configuration: {e}") from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> TransportConfig:
    """Load and validate transport configuration from YAML + .env.

    Args:
        config_path: Path to a YAML config file. Defaults to
            ``~/.lino-go/config.yaml``; when the default file does not exist
            only defaults and environment overrides are used.
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    if config_path is None:
        path = DEFAULT_CONFIG_PATH
        if path.exists():
            raw = _read_yaml(path)
        else:
            logger.debug("No config file at %s, using defaults", path)
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = _read_yaml(path)

    raw = _apply_env_overrides(_interpolate_env(raw))
    cfg = _build_transport(raw)

    _validate(cfg)
    logger.info("Configuration loaded (node=%s, chain_id=%s)", cfg.node_url, cfg.chain_id)
    return cfg


def with_overrides(cfg: TransportConfig, **changes: Any) -> TransportConfig:
    """Return a copy of ``cfg`` with non-None ``changes`` applied."""
    changes = {k: v for k, v in changes.items() if v is not None}
    updated = replace(cfg, **changes)
    _validate(updated)
    return updated


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return raw


def _validate(cfg: TransportConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.node_url:
        raise ConfigurationError("missing node URL")
    if cfg.query_timeout <= 0:
        raise ConfigurationError("query_timeout must be positive")
    if cfg.rpc_timeout <= 0:
        raise ConfigurationError("rpc_timeout must be positive")
