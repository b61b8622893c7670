#!/usr/bin/env python3
"""User configuration: dataclass sections persisted as YAML."""

from __future__ import annotations

import dataclasses
import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import OutputFormat
from .utils import ConfigError, parse_log_level

CONFIG_FILENAME = "config.yaml"


class ConflictStrategy(enum.Enum):
    """How to settle a package that depends on both a JRE and a JDK."""

    JRE = "jre"
    JDK = "jdk"
    PREFER_JDK = "prefer-jdk"
    PREFER_JRE = "prefer-jre"
    PROMPT = "prompt"

    @classmethod
    def parse(cls, value: str) -> "ConflictStrategy":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ConfigError(f"Invalid conflict strategy '{value}' (expected one of: {choices})") from exc


def _xdg_dir(env_var: str, fallback: str) -> Path:
    base = os.environ.get(env_var)
    if base:
        return Path(base) / "archport"
    return Path.home() / fallback / "archport"


def default_config_path() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / CONFIG_FILENAME


def default_data_dir() -> Path:
    return _xdg_dir("XDG_DATA_HOME", ".local/share")


def default_cache_dir() -> Path:
    return _xdg_dir("XDG_CACHE_HOME", ".cache")


@dataclass
class GeneralConfig:
    cache_dir: Path = field(default_factory=default_cache_dir)
    data_dir: Path = field(default_factory=default_data_dir)
    output_dir: Optional[Path] = None
    jobs: int = field(default_factory=lambda: os.cpu_count() or 1)
    auto_yes: bool = False


@dataclass
class ConversionConfig:
    default_format: OutputFormat = OutputFormat.PKG_TAR_ZST
    skip_deps: bool = False
    generate_pkgbuild: bool = False
    keep_temp: bool = False
    min_match_confidence: float = 0.6
    strip_binaries: bool = False


@dataclass
class NetworkConfig:
    timeout: int = 30
    proxy: Optional[str] = None
    aur_url: str = "https://aur.archlinux.org/rpc/v5"
    offline: bool = False


@dataclass
class LoggingConfig:
    level: str = "info"
    file: Optional[Path] = None
    color: bool = True


@dataclass
class JavaConfig:
    conflict_strategy: ConflictStrategy = ConflictStrategy.PREFER_JDK
    add_java_conflicts: bool = True
    default_version: str = "latest"


@dataclass
class Config:
    """Complete configuration, grouped by section."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    java: JavaConfig = field(default_factory=JavaConfig)

    @property
    def db_dir(self) -> Path:
        return self.general.data_dir / "db"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML; a missing file yields the defaults."""
        config_path = path or default_config_path()
        config = cls()
        if not config_path.exists():
            return config

        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Unable to read config file {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        for section_name, values in data.items():
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section_name}' must be a mapping")
            for key, value in values.items():
                config.set(f"{section_name}.{key}", value)
        return config

    def to_dict(self) -> dict[str, dict[str, Any]]:
        result: dict[str, dict[str, Any]] = {}
        for section_field in dataclasses.fields(self):
            section = getattr(self, section_field.name)
            result[section_field.name] = {
                item.name: _dump_value(getattr(section, item.name))
                for item in dataclasses.fields(section)
            }
        return result

    def save(self, path: Optional[Path] = None) -> Path:
        config_path = path or default_config_path()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(self.to_dict(), handle, default_flow_style=False, sort_keys=False)
        except OSError as exc:
            raise ConfigError(f"Unable to write config file {config_path}: {exc}") from exc
        return config_path

    @classmethod
    def init(cls, path: Optional[Path] = None, force: bool = False) -> Path:
        """Write a default configuration file and return its path."""
        config_path = path or default_config_path()
        if config_path.exists() and not force:
            raise ConfigError(f"Config file already exists: {config_path} (use --force to overwrite)")
        return cls().save(config_path)

    def _resolve_key(self, key: str) -> tuple[Any, dataclasses.Field]:
        section_name, _, item_name = key.partition(".")
        section = getattr(self, section_name, None) if item_name else None
        if section is None or not dataclasses.is_dataclass(section):
            raise ConfigError(f"Unknown config key: {key}")

        for item in dataclasses.fields(section):
            if item.name == item_name:
                return section, item
        raise ConfigError(f"Unknown config key: {key}")

    def get(self, key: str) -> Any:
        """Return the value behind a dotted key such as ``network.timeout``."""
        section, item = self._resolve_key(key)
        return getattr(section, item.name)

    def set(self, key: str, value: Any) -> None:
        """Set a dotted key, converting ``value`` to the field's type."""
        section, item = self._resolve_key(key)
        current = getattr(section, item.name)
        setattr(section, item.name, _coerce(key, item, current, value))


def _dump_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        if isinstance(value, OutputFormat):
            return value.extension
        return value.value
    if isinstance(value, Path):
        return str(value)
    return value


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value}")


def _coerce(key: str, item: dataclasses.Field, current: Any, value: Any) -> Any:
    optional = "Optional" in str(item.type)
    if value is None or (optional and str(value).strip().lower() in ("", "none", "null")):
        if optional:
            return None
        raise ConfigError(f"{key} cannot be empty")

    try:
        if isinstance(current, bool) or item.type == "bool":
            return _parse_bool(key, value)
        if isinstance(current, ConflictStrategy):
            return ConflictStrategy.parse(str(value))
        if isinstance(current, OutputFormat):
            return OutputFormat.from_extension(str(value))
        if "Path" in str(item.type):
            return Path(str(value)).expanduser()
        if item.type == "int":
            parsed = int(value)
            if parsed <= 0:
                raise ConfigError(f"{key} must be positive")
            return parsed
        if key == "logging.level":
            parse_log_level(str(value))
            return str(value).strip().lower()
        if item.type == "float":
            parsed_float = float(value)
            if not 0.0 <= parsed_float <= 1.0:
                raise ConfigError(f"{key} must be between 0 and 1")
            return parsed_float
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {key}: {value}") from exc

    return str(value)
