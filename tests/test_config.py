from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from ini_events.config import (
    ConfigError,
    ToolConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".ini-events.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        pacman_conf_bin = "/usr/local/bin/pacman-conf"
        pacman_conf = "/etc/pacman.conf"
        root_dir = "/mnt"
        max_file_size = 2048
        """,
    )

    config = load_config(tmp_path)

    assert config == ToolConfig(
        pacman_conf_bin="/usr/local/bin/pacman-conf",
        pacman_conf="/etc/pacman.conf",
        root_dir="/mnt",
        max_file_size=2048,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [ini-events]
        root_dir = "/srv/root"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.root_dir == "/srv/root"
    assert config.pacman_conf_bin == "pacman-conf"


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        pacman_conf = "/etc/pacman.conf"
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.pacman_conf == "/etc/pacman.conf"


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        root_dir = "/mnt"
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.ini-events]
        """,
    )

    config = load_config(child)

    assert config.root_dir is None


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == ToolConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        root_dir = "/from/parent"
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.root_dir == "/from/parent"


def test_load_config_errors_on_unknown_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        root_dir = "/mnt"
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError, match="unexpected"):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_dotfile(tmp_path, 'ini-events = "nope"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_expands_home(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        pacman_conf = "~/pacman.conf"
        """,
    )

    config = load_config(tmp_path)

    assert config.pacman_conf == str(tmp_path / "pacman.conf")


def test_apply_overrides_ignores_none():
    config = ToolConfig(root_dir="/mnt")

    assert apply_overrides(config, root_dir=None) is config
    assert apply_overrides(config, pacman_conf="/x").pacman_conf == "/x"


def test_build_config_prefers_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        pacman_conf = "/etc/pacman.conf"
        root_dir = "/mnt"
        """,
    )

    config = build_config(tmp_path, pacman_conf="/tmp/other.conf")

    assert config.pacman_conf == "/tmp/other.conf"
    assert config.root_dir == "/mnt"


def test_build_config_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.ini-events]
        max_file_size = 0
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        ToolConfig(pacman_conf_bin=""),
        ToolConfig(pacman_conf=""),
        ToolConfig(root_dir=""),
        ToolConfig(root_dir=3),  # type: ignore[arg-type]
        ToolConfig(max_file_size=0),
        ToolConfig(max_file_size=-1),
        ToolConfig(max_file_size="big"),  # type: ignore[arg-type]
        ToolConfig(max_file_size=True),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_invalid_values(config: ToolConfig):
    with pytest.raises(ConfigError):
        validate_config(config)
