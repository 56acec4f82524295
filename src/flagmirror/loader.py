"""Configuration loading: YAML files, then FLAGMIRROR_* environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import FlagMirrorConfig
from .exceptions import ConfigError, FlagMirrorErrorCodes

ENV_PREFIX = "FLAGMIRROR_"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in. Neither input is modified.

    Nested mappings merge key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``FLAGMIRROR_<SECTION>__<FIELD>`` variables into a nested dict.

    ``FLAGMIRROR_API__ACCESS_TOKEN=t`` becomes ``{"api": {"access_token": "t"}}``.
    Values stay strings; pydantic coerces them during validation.
    """
    overrides: dict[str, Any] = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = [p.lower() for p in name[len(ENV_PREFIX) :].split("__")]
        if any(not p for p in parts):
            continue
        node = overrides
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return overrides


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"unable to read config file {path}: {e}",
            cause=e,
            code=FlagMirrorErrorCodes.READ_FILE,
        ) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"unable to parse config file {path}",
            cause=e,
            code=FlagMirrorErrorCodes.PARSE_YAML,
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"config file {path} must contain a mapping",
            code=FlagMirrorErrorCodes.PARSE_YAML,
        )
    return data


def load(
    base_path: Path,
    env_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> FlagMirrorConfig:
    """Build a FlagMirrorConfig from layered sources.

    Later layers win: ``base_path``, then ``env_path`` when that file exists,
    then ``FLAGMIRROR_*`` variables from ``environ`` (``os.environ`` by default).
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    data = deep_merge(data, env_overrides(os.environ if environ is None else environ))
    try:
        return FlagMirrorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"invalid configuration: {e}",
            cause=e,
            code=FlagMirrorErrorCodes.VALIDATION,
        ) from e
