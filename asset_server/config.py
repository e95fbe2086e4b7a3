"""Configuration utilities for the asset server.

This module loads application configuration with the following rules:
- Primary source: `assets_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_ASSETS_CONFIG = Path("assets_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class AssetsConfig(BaseModel):
    mount_prefix: str = Field(default="/assets")
    root: Path = Field(default=Path("public/assets"))
    default_charset: str = Field(default="utf-8")

    @field_validator("mount_prefix")
    @classmethod
    def prefix_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/") or (len(v) > 1 and v.endswith("/")):
            raise ValueError("assets.mount_prefix must start with '/' and must not end with '/'")
        return v

    @field_validator("default_charset")
    @classmethod
    def charset_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("assets.default_charset must be a non-empty string")
        return v.strip()


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"logging.level must be one of {sorted(allowed)}")
        return level


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, gt=0, lt=65536)


class AppConfig(BaseModel):
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) assets_config.json at project root
    4) Defaults
    """

    base = _read_json_file(ROOT_ASSETS_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    mount_prefix = _env("ASSETS_MOUNT_PREFIX") or _read_config_file("assets.mount_prefix") or _base("assets.mount_prefix", "/assets")
    root = _env("ASSETS_ROOT") or _read_config_file("assets.root") or _base("assets.root", "public/assets")
    charset = _env("ASSETS_DEFAULT_CHARSET") or _read_config_file("assets.default_charset") or _base("assets.default_charset", "utf-8")
    level = _env("LOG_LEVEL") or _read_config_file("logging.level") or _base("logging.level", "INFO")
    host = _env("HOST") or _read_config_file("server.host") or _base("server.host", "127.0.0.1")
    port_text = _env("PORT") or _read_config_file("server.port") or _base("server.port", "8000")

    try:
        return AppConfig(
            assets=AssetsConfig(mount_prefix=mount_prefix, root=Path(root), default_charset=charset),
            server=ServerConfig(host=host, port=str(port_text).strip()),
            logging=LoggingConfig(level=level),
        )
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "AssetsConfig",
    "LoggingConfig",
    "ServerConfig",
    "load_config",
]
