"""Server configuration loaded from a YAML file with built-in defaults."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, TypeVar

import yaml

_SEARCH_DIRS = (Path("."), Path("config"))
_T = TypeVar("_T")


@dataclass
class ServerConfig:
    mode: str = "debug"
    port: str = "8080"
    read_timeout: int = 10
    write_timeout: int = 60
    rate_limit: int = 1000


@dataclass
class LoggerConfig:
    """Logger settings; left empty unless the file gives them."""

    level: str = ""
    format: str = ""
    dir: str = ""


@dataclass
class SwaggerConfig:
    api_path: str = "/api/api.yaml"


@dataclass
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    logger: LoggerConfig = field(default_factory=LoggerConfig)
    swagger: SwaggerConfig = field(default_factory=SwaggerConfig)


def _find(name: str) -> Path | None:
    given = Path(name)
    candidates = [given, given.with_name(given.name + ".yaml")]
    if not given.is_absolute():
        for directory in _SEARCH_DIRS:
            candidates.append(directory / given)
            candidates.append(directory / (given.name + ".yaml"))
    return next((path for path in candidates if path.is_file()), None)


def _lower_keys(raw: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in raw.items()}


def _section(raw: dict[str, Any], name: str, cls: type[_T]) -> _T:
    values = raw.get(name)
    if values is None:
        return cls()
    if not isinstance(values, Mapping):
        raise ValueError(f"config section {name!r} must be a mapping")
    values = _lower_keys(values)
    kwargs: dict[str, Any] = {}
    for spec in fields(cls):
        value = values.get(spec.name)
        if value is not None:
            kwargs[spec.name] = type(spec.default)(value)
    return cls(**kwargs)


def setup(path: str) -> Config:
    """Load configuration from ``path``; defaults are used when no file is found."""
    found = _find(path)
    if found is None:
        return Config()
    raw = yaml.safe_load(found.read_text(encoding="utf-8"))
    if raw is None:
        return Config()
    if not isinstance(raw, Mapping):
        raise ValueError(f"config file {found} must hold a mapping")
    raw = _lower_keys(raw)
    return Config(
        server=_section(raw, "server", ServerConfig),
        logger=_section(raw, "logger", LoggerConfig),
        swagger=_section(raw, "swagger", SwaggerConfig),
    )