"""
Configuration for tablemark.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/tablemark/config.toml) if exists
3. Environment variables (TABLEMARK_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

from .table import DEFAULT_STYLE


@dataclass
class DocumentConfig:
    """How the table is wrapped for output."""
    wrap_document: bool = True  # html/head/body around the table
    include_style: bool = True
    style: str = DEFAULT_STYLE


@dataclass
class ReaderConfig:
    """Tabular input settings."""
    strict: bool = True  # ragged records are malformed
    default_format: str = "csv"  # used when detection finds nothing


@dataclass
class IOConfig:
    """File I/O settings."""
    max_file_size: int = 10 * 1024 * 1024
    encoding: str = "utf-8"


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class Config:
    """Root config with all settings."""
    document: DocumentConfig = field(default_factory=DocumentConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    io: IOConfig = field(default_factory=IOConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tablemark" / "config.toml"
    return Path.home() / ".config" / "tablemark" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError):
            config = Config()  # fall back to defaults on a broken file

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "document" in data:
        d = data["document"]
        if "wrap_document" in d:
            config.document.wrap_document = bool(d["wrap_document"])
        if "include_style" in d:
            config.document.include_style = bool(d["include_style"])
        if "style" in d:
            config.document.style = str(d["style"])

    if "reader" in data:
        r = data["reader"]
        if "strict" in r:
            config.reader.strict = bool(r["strict"])
        if "default_format" in r:
            config.reader.default_format = str(r["default_format"])

    if "io" in data:
        io = data["io"]
        if "max_file_size" in io:
            config.io.max_file_size = int(io["max_file_size"])
        if "encoding" in io:
            config.io.encoding = str(io["encoding"])

    if "logging" in data:
        lg = data["logging"]
        if "level" in lg:
            config.logging.level = str(lg["level"]).upper()

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "TABLEMARK_WRAP_DOCUMENT": ("document", "wrap_document", bool),
        "TABLEMARK_INCLUDE_STYLE": ("document", "include_style", bool),
        "TABLEMARK_STRICT": ("reader", "strict", bool),
        "TABLEMARK_DEFAULT_FORMAT": ("reader", "default_format", str),
        "TABLEMARK_MAX_FILE_SIZE": ("io", "max_file_size", int),
        "TABLEMARK_ENCODING": ("io", "encoding", str),
        "TABLEMARK_LOG_LEVEL": ("logging", "level", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                # Bool needs special handling: "true", "1", "yes" -> True
                converted = val.lower() in ("true", "1", "yes") if conv is bool else conv(val)
                setattr(getattr(config, section), attr, converted)

    config.logging.level = config.logging.level.upper()
    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
