"""Configuration management for histo-graph.

Loads settings from environment variables with sensible defaults. Only the
tool and server layers read configuration; storage functions always take
their base path explicitly.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class StoreConfig:
    """Object store configuration."""
    store_dir: str = ".store"
    snapshot_name: str = "current"
    verify_reads: bool = False  # re-hash every object read

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            store_dir=os.getenv("HISTO_GRAPH_STORE_DIR", ".store"),
            snapshot_name=os.getenv("HISTO_GRAPH_SNAPSHOT", "current"),
            verify_reads=_env_flag("HISTO_GRAPH_VERIFY_READS"),
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""
    store: StoreConfig = field(default_factory=StoreConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            store=StoreConfig.from_env(),
            log_level=os.getenv("HISTO_GRAPH_LOG_LEVEL", "INFO").upper(),
        )
