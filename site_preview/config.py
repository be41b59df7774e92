# === FILE: site_preview/config.py ===
"""
Loading and validation of the site_preview engine configuration.
The schema is described and checked with Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PreviewConfig(BaseModel):
    """Settings shared by every resolution an engine instance performs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Total timeout per HTTP request (seconds).")
    user_agent: str = Field("SitePreviewBot/1.0", min_length=1, description="User-Agent header.")
    cache_max_entries: int = Field(256, ge=1, description="Documents kept in the LRU cache.")
    cache_ttl: Optional[float] = Field(
        None, gt=0, description="Seconds a cached document stays fresh; None keeps it forever."
    )
    max_image_bytes: int = Field(5 * 1024 * 1024, ge=1, description="Upper bound for image bodies.")
    resolve_relative_urls: bool = Field(
        True, description="Resolve relative og:image/icon URLs against the page URL."
    )
    favicon_path: str = Field("/favicon.ico", description="Conventional favicon location.")

    @field_validator("favicon_path")
    @classmethod
    def _absolute_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("favicon_path must start with '/'")
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> PreviewConfig:
    """
    Read YAML or JSON and return a validated PreviewConfig.
    Without a path the defaults are used; a missing file raises FileNotFoundError.
    """
    if path is None:
        return PreviewConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return PreviewConfig(**data)
