"""
Catalog configuration loader (data sources, cache, repository wiring).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"


class RemoteConfig(BaseModel):
    mode: Literal["simulated", "http"] = "simulated"
    base_url: str = ""
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    latency: float = Field(default=0.8, ge=0.0)
    error_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    availability: float = Field(default=0.9, ge=0.0, le=1.0)


class CacheConfig(BaseModel):
    expiration_hours: float = Field(default=24.0, gt=0)
    availability: float = Field(default=0.95, ge=0.0, le=1.0)
    shared_storage: bool = False


class CatalogConfig(BaseModel):
    repository: Literal["cached", "in_memory"] = "cached"
    latency_scale: float = Field(default=1.0, ge=0.0)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)


# Environment variable -> (section, key). Section None means top level.
_ENV_OVERRIDES = {
    "CATALOG_REPOSITORY": (None, "repository"),
    "CATALOG_LATENCY_SCALE": (None, "latency_scale"),
    "CATALOG_REMOTE_MODE": ("remote", "mode"),
    "CATALOG_REMOTE_URL": ("remote", "base_url"),
    "CATALOG_REMOTE_API_KEY": ("remote", "api_key"),
    "CATALOG_ERROR_RATE": ("remote", "error_rate"),
}


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or not value.strip():
            continue
        if section is None:
            target = data
        else:
            target = data.get(section) or {}
            if not isinstance(target, dict):
                # Left for schema validation to reject.
                continue
            data[section] = target
        target[key] = value.strip()
        logger.debug("Config override from %s", env_name)
    return data


def load_catalog_config(config_path: Optional[Path] = None) -> CatalogConfig:
    """
    Load and validate catalog configuration.

    Args:
        config_path: Path to config file. Defaults to $CATALOG_CONFIG, then
            config/catalog_config.yml. A missing file means all defaults.

    Returns:
        Validated CatalogConfig object

    Raises:
        ValidationError: If config (file + environment) doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        env_path = os.getenv("CATALOG_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        # Empty sections mean defaults.
        data = {k: v for k, v in data.items() if v is not None}
    else:
        logger.info("Catalog config file not found at %s, using defaults", config_path)

    data = _apply_env_overrides(data)

    try:
        cfg = CatalogConfig(**data)
        logger.info("Loaded catalog config (repository=%s, remote=%s)", cfg.repository, cfg.remote.mode)
        return cfg
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise
