from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from importlib import import_module
from typing import Any, Dict, Mapping, cast

from pydantic import BaseModel, ConfigDict

yaml = cast(Any, import_module("yaml"))

ENV_PREFIX = "UNISPLIT__"
CONFIG_ENV = "UNISPLIT_CONFIG"


class SplitSettings(BaseModel):
    """Process-wide defaults for the segmentation entry points."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    locale: str | None = None
    backend: str = "icu"
    warn_on_recycling: bool = False


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError(f"{p.name} must contain a top-level mapping")
    return data


def _env_overrides() -> Dict[str, Any]:
    """
    Map UNISPLIT__KEY=value -> settings[key]=value (key lower-cased).
    Values are YAML-coerced (so 'true', '42' etc. become bool/int).
    """
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(ENV_PREFIX):
            continue
        key = k[len(ENV_PREFIX) :].lower()
        try:
            val = yaml.safe_load(v)
        except yaml.YAMLError:
            val = v
        out[key] = val
    return out


def _drop_unknown(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Warn about and discard keys that are not settings fields."""
    known = set(SplitSettings.model_fields)
    unknown = sorted(k for k in values if k not in known)
    if unknown:
        warnings.warn(f"Unknown unisplit settings: {', '.join(unknown)}", stacklevel=3)
    return {k: v for k, v in values.items() if k in known}


def load_settings(
    path: str | os.PathLike | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> SplitSettings:
    """Load YAML + env/explicit overrides into validated SplitSettings."""
    data = _read_yaml(path or os.environ.get(CONFIG_ENV))
    sources = (d for d in (data, _env_overrides(), overrides) if d)
    merged: Dict[str, Any] = reduce(lambda acc, d: {**acc, **d}, sources, {})
    return SplitSettings.model_validate(_drop_unknown(merged))


__all__ = ["CONFIG_ENV", "ENV_PREFIX", "SplitSettings", "load_settings"]
