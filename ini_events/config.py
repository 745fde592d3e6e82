"""Configuration loading and management."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_PACMAN_CONF_BIN


@dataclass
class ToolConfig:
    """Configuration for the ini-events command line tool.

    Attributes:
        pacman_conf_bin: Name or path of the ``pacman-conf`` helper.
        pacman_conf: Path of the pacman config file to expand; None uses the
            helper's compiled-in default.
        root_dir: Alternate pacman root directory, or None.
        max_file_size: Maximum size in bytes of an INI file read from disk.

    Examples:
        ToolConfig(pacman_conf="/etc/pacman.conf", max_file_size=1024)
    """

    # pacman-conf helper
    pacman_conf_bin: str = DEFAULT_PACMAN_CONF_BIN
    pacman_conf: str | None = None
    root_dir: str | None = None

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


_MISSING = object()


def load_config(search_path: Path) -> ToolConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.ini-events]`` table from `pyproject.toml` and the
    ``[ini-events]`` or ``[tool.ini-events]`` table from `.ini-events.toml`
    when present. TOML files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ToolConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("/etc"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "ini-events")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".ini-events.toml",
            table_paths=[("ini-events",), ("tool", "ini-events")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ToolConfig()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ToolConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ToolConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ToolConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    known = {field.name for field in fields(ToolConfig)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ConfigError(
            f"Unsupported `[{table_display}]` keys in {config_file}: {', '.join(unknown)}"
        )

    return ToolConfig(**raw_config)


def normalize_config(config: ToolConfig) -> ToolConfig:
    pacman_conf = config.pacman_conf
    if isinstance(pacman_conf, str):
        pacman_conf = os.path.expanduser(pacman_conf)

    root_dir = config.root_dir
    if isinstance(root_dir, str):
        root_dir = os.path.expanduser(root_dir)

    return replace(config, pacman_conf=pacman_conf, root_dir=root_dir)


def validate_config(config: ToolConfig) -> None:
    """Validate a `ToolConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the helper name is empty, a path is not a string, or
            the size limit is not a positive integer.
    """
    if not isinstance(config.pacman_conf_bin, str) or not config.pacman_conf_bin:
        raise ConfigError("`pacman_conf_bin` must be a non-empty string")

    for key in ("pacman_conf", "root_dir"):
        value = getattr(config, key)
        if value is not None and (not isinstance(value, str) or not value):
            raise ConfigError(f"`{key}` must be a non-empty string")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})


def apply_overrides(config: ToolConfig, **overrides: object) -> ToolConfig:
    """Apply override values to a `ToolConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by field name; None values are ignored.

    Returns:
        ToolConfig: New configuration, or `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `ToolConfig`.

    Examples:
        updated = apply_overrides(config, root_dir="/mnt")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ToolConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ToolConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), pacman_conf="/etc/pacman.conf")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
