# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Negotiator configuration: YAML/TOML files, env overrides and dataclass binding.

Values are addressed by dot-notation keys (``negotiator.cookie_name``).  A
matching ``NEGOTIATOR_*`` environment variable always wins over the file, and
string values may reference other values or the environment through
``${...}`` placeholders.
"""

from __future__ import annotations

import dataclasses
import os
import re
import tomllib
import typing
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

_CONFIG_PROPERTIES_ATTR = "__negotiator_config_prefix__"

_ENV_PREFIX = "NEGOTIATOR_"

_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to the configuration section at *prefix*.

    Usage:
        @config_properties(prefix="negotiator")
        @dataclass
        class NegotiationProperties:
            root: list[str] = field(default_factory=list)
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable consulted for *key*: ``negotiator.cookie_name`` -> ``NEGOTIATOR_COOKIE_NAME``."""
    return _ENV_PREFIX + key.removeprefix("negotiator.").upper().replace(".", "_").replace("-", "_")


class Config:
    """Nested configuration values with env var overrides.

    Priority (highest wins):
    1. Environment variables (``NEGOTIATOR_<SECTION>_<KEY>``)
    2. The configuration dict, usually loaded from a YAML or TOML file
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config files merged into this instance, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Load *path* (``.toml`` or YAML) plus any ``{stem}-{profile}{suffix}`` overlays.

        A missing *path* yields an empty configuration.
        """
        path = Path(path)
        config = cls()
        if not path.exists():
            return config

        config._merge_file(path, str(path))
        for profile in active_profiles or []:
            overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
            if overlay.exists():
                config._merge_file(overlay, f"{overlay} (profile: {profile})")
        return config

    def _merge_file(self, path: Path, source: str) -> None:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                loaded = tomllib.load(f)
        else:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        self._data = _deep_merge(self._data, loaded or {})
        self._loaded_sources.append(source)

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at dot-notation *key*, checking the environment first.

        String values have their ``${...}`` placeholders resolved: ``${ENV_VAR}``,
        ``${other.key}`` and ``${key:default}``.
        """
        env_val = os.environ.get(env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply, check for circular references")

        def _replace(match: re.Match[str]) -> str:
            ref_key, sep, fallback = match.group(1).partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            resolved = self._lookup(ref_key)
            if resolved is not _MISSING and resolved is not None:
                text = str(resolved)
                return self._resolve_placeholders(text, depth + 1) if "${" in text else text
            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '{match.group(0)}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the dict stored under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        Every field is looked up through :meth:`get`, so environment overrides
        apply.  String values are coerced to the field's declared ``int``,
        ``float``, ``bool`` or ``list[str]`` type; absent fields keep their
        dataclass defaults.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is not None:
                kwargs[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**kwargs)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*; override wins."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce(value: Any, expected_type: Any) -> Any:
    """Coerce string values (env vars, placeholders) to the declared field type."""
    if not isinstance(value, str):
        return value
    if expected_type is int:
        return int(value)
    if expected_type is float:
        return float(value)
    if expected_type is bool:
        return value.strip().lower() in ("true", "1", "yes", "on")
    if typing.get_origin(expected_type) is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value
