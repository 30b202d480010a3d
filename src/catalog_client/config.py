"""
Client configuration loader (backend endpoint, timeouts, listing, summaries, storage).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "client_config.yml"


class BackendConfig(BaseModel):
    base_url: str = "http://localhost:8080"
    api_prefix: str = "/api"


class TimeoutConfig(BaseModel):
    """Upper bounds (seconds) for live calls; demo calls are never bounded."""

    read_seconds: float = Field(default=7.0, gt=0, le=60)
    write_seconds: float = Field(default=12.0, gt=0, le=60)
    summary_seconds: float = Field(default=10.0, gt=0, le=60)
    probe_seconds: float = Field(default=5.0, gt=0, le=60)


class ListingConfig(BaseModel):
    product_page_size: int = Field(default=20, ge=1, le=200)
    review_page_size: int = Field(default=10, ge=1, le=200)
    debounce_seconds: float = Field(default=0.5, ge=0, le=10)


class SummaryConfig(BaseModel):
    review_limit: int = Field(default=30, ge=1, le=100)
    default_language: str = "en"


class StorageConfig(BaseModel):
    redis_url: Optional[str] = None
    namespace: str = "catalog_client"


class ClientSettings(BaseModel):
    backend: BackendConfig = Field(default_factory=BackendConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    summaries: SummaryConfig = Field(default_factory=SummaryConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def load_client_settings(config_path: Optional[Path] = None) -> ClientSettings:
    """
    Load and validate client configuration from YAML, then apply environment
    overrides (CATALOG_BACKEND_URL, REDIS_URL).

    Args:
        config_path: Path to config file. Defaults to config/client_config.yml;
            when the default file is absent the built-in defaults are used.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    data = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Client config file not found: {config_path}")

    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No client config at %s, using defaults", path)

    try:
        settings = ClientSettings(**data)
    except ValidationError as e:
        logger.error("Client config validation failed: %s", e)
        raise

    backend_url = os.getenv("CATALOG_BACKEND_URL", "").strip()
    if backend_url:
        settings.backend.base_url = backend_url
    redis_url = os.getenv("REDIS_URL", "").strip()
    if redis_url:
        settings.storage.redis_url = redis_url

    logger.info("Loaded client config (backend=%s)", settings.backend.base_url)
    return settings
