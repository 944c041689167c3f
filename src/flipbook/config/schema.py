"""Typed configuration schema and loader for the flipbook package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint, constr

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class RenderSettings(BaseModel):
    """Rasterization settings."""

    scale: confloat(gt=0.0)
    default_aspect_ratio: confloat(gt=0.0)

    model_config = ConfigDict(extra="forbid")


class AnimationSettings(BaseModel):
    """Slide transition timing."""

    duration_ms: conint(ge=0)

    model_config = ConfigDict(extra="forbid")


class AssetSettings(BaseModel):
    """Opaque static image references passed through to the presentation."""

    cover: constr(min_length=1)
    loading_image: constr(min_length=1)

    model_config = ConfigDict(extra="forbid")


class SourceSettings(BaseModel):
    """Document source location."""

    document: constr(min_length=1)
    document_env: str

    model_config = ConfigDict(extra="forbid")


class MessageSettings(BaseModel):
    """User facing messages."""

    load_failed: constr(min_length=1)

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    render: RenderSettings
    animation: AnimationSettings
    assets: AssetSettings
    source: SourceSettings
    messages: MessageSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML < the
    environment variable named by ``source.document_env``.
    """

    with (
        importlib_resources.files("flipbook.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    document_env = cfg.source.document_env
    if document_env and environ.get(document_env):
        cfg.source.document = environ[document_env]

    return cfg


__all__ = [
    "ConfigModel",
    "RenderSettings",
    "AnimationSettings",
    "AssetSettings",
    "SourceSettings",
    "MessageSettings",
    "deep_merge_dicts",
    "load_config",
]
