from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

DEFAULT_API_URL = "https://api.tozny.com"


class RealmConfig(BaseModel):
    """Realm credentials."""

    key_id: Optional[str] = None
    secret: Optional[str] = None


class HttpConfig(BaseModel):
    """HTTP transport settings."""

    backend: Literal["httpx", "inmemory"] = "httpx"
    timeout: float = 10.0


class ToznyConfig(BaseModel):
    """Top-level configuration model."""

    api_url: str = DEFAULT_API_URL
    realm: RealmConfig = RealmConfig()
    http: HttpConfig = HttpConfig()


def load_config(path: Optional[str] = None) -> ToznyConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TOZNY_CONFIG env
            variable or 'tozny.yaml' in the current directory.

    Environment variables TOZNY_API_URL (or the older API_URL),
    TOZNY_REALM_KEY_ID and TOZNY_REALM_SECRET override file values.
    """

    config_path = path or os.getenv("TOZNY_CONFIG", "tozny.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = ToznyConfig(**data)
    else:
        config = ToznyConfig()

    env_api_url = os.getenv("TOZNY_API_URL") or os.getenv("API_URL")
    if env_api_url:
        config.api_url = env_api_url
    env_key_id = os.getenv("TOZNY_REALM_KEY_ID")
    if env_key_id:
        config.realm.key_id = env_key_id
    env_secret = os.getenv("TOZNY_REALM_SECRET")
    if env_secret:
        config.realm.secret = env_secret
    return config
