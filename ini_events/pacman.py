"""Typed pacman configuration built from pacman-conf output.

See pacman.conf(5) for the meaning of each field. Values are kept textually;
no attempt is made to turn fields such as ``SigLevel`` or ``Usage`` into
bitfields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .command import expand_config
from .constants import DEFAULT_USE_DELTA, EMPTY_PACMAN_CONF, OPTIONS_SECTION
from .exceptions import (
    DirectiveError,
    ErrorLine,
    InvalidValueError,
    MissingValueError,
    NoSectionError,
)
from .models import Callback, Directive, Section
from .parser import Ini

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# [options] keys, grouped by how their value is stored.
OPTION_STRINGS = {
    "RootDir": "root_dir",
    "DBPath": "db_path",
    "GPGDir": "gpg_dir",
    "LogFile": "log_file",
    "Architecture": "architecture",
    "XferCommand": "xfer_command",
}
OPTION_LISTS = {
    "CacheDir": "cache_dir",
    "HookDir": "hook_dir",
    "HoldPkg": "hold_pkg",
    "IgnorePkg": "ignore_pkg",
    "IgnoreGroup": "ignore_group",
    "NoUpgrade": "no_upgrade",
    "NoExtract": "no_extract",
    "CleanMethod": "clean_method",
    "SigLevel": "sig_level",
    "LocalFileSigLevel": "local_file_sig_level",
    "RemoteFileSigLevel": "remote_file_sig_level",
}
OPTION_FLAGS = {
    "UseSyslog": "use_syslog",
    "Color": "color",
    "TotalDownload": "total_download",
    "CheckSpace": "check_space",
    "VerbosePkgLists": "verbose_pkg_lists",
    "DisableDownloadTimeout": "disable_download_timeout",
    "ILoveCandy": "chomp",
}
REPOSITORY_LISTS = {
    "Server": "servers",
    "SigLevel": "sig_level",
    "Usage": "usage",
}


@dataclass
class Repository:
    """A pacman repository, declared by a ``[name]`` section."""

    name: str
    servers: list[str] = field(default_factory=list)
    sig_level: list[str] = field(default_factory=list)
    usage: list[str] = field(default_factory=list)


@dataclass
class PacmanConfig(Ini):
    """A pacman configuration.

    Populated event by event: each section other than ``[options]`` adds a
    `Repository`, and each directive fills the matching field. Unknown keys
    are ignored so that newer pacman releases do not break parsing.

    Examples:
        config = PacmanConfig.from_str("[options]\\nColor\\n[core]\\nServer = http://m\\n")
        config.color  # True
        config.repos[0].servers  # ["http://m"]
    """

    root_dir: str = ""
    db_path: str = ""
    cache_dir: list[str] = field(default_factory=list)
    hook_dir: list[str] = field(default_factory=list)
    gpg_dir: str = ""
    log_file: str = ""
    hold_pkg: list[str] = field(default_factory=list)
    ignore_pkg: list[str] = field(default_factory=list)
    ignore_group: list[str] = field(default_factory=list)
    architecture: str = ""
    xfer_command: str = ""
    no_upgrade: list[str] = field(default_factory=list)
    no_extract: list[str] = field(default_factory=list)
    clean_method: list[str] = field(default_factory=list)
    sig_level: list[str] = field(default_factory=list)
    local_file_sig_level: list[str] = field(default_factory=list)
    remote_file_sig_level: list[str] = field(default_factory=list)
    use_syslog: bool = False
    color: bool = False
    use_delta: float = 0.0
    total_download: bool = False
    check_space: bool = False
    verbose_pkg_lists: bool = False
    disable_download_timeout: bool = False
    parallel_downloads: int = 0
    chomp: bool = False
    repos: list[Repository] = field(default_factory=list)

    @classmethod
    def from_str(cls, content: str) -> PacmanConfig:
        """Build a configuration from already expanded INI text."""
        config = cls()
        config.parse_str(content)
        return config

    @classmethod
    def load(cls) -> PacmanConfig:
        """Read the system pacman.conf (usually ``/etc/pacman.conf``)."""
        return Options().read()

    @classmethod
    def empty(cls) -> PacmanConfig:
        """Read pacman's compiled-in defaults.

        Expanding an empty file makes pacman-conf fill every field with its
        defaults, which differ from the zero values of ``PacmanConfig()``.
        """
        return cls.from_file(EMPTY_PACMAN_CONF)

    @classmethod
    def from_file(cls, path: str) -> PacmanConfig:
        """Expand and read the given pacman config file."""
        return Options(pacman_conf=path).read()

    @staticmethod
    def options() -> Options:
        """Start an `Options` builder for a non-default pacman-conf setup."""
        return Options()

    def callback(self, cb: Callback) -> None:
        if isinstance(cb.kind, Section):
            self._handle_section(cb.kind.name)
            return

        try:
            self._handle_directive(cb.kind)
        except DirectiveError as error:
            error.line = ErrorLine(cb.line_number, cb.line)
            raise

    def _handle_section(self, name: str) -> None:
        if name != OPTIONS_SECTION:
            self.repos.append(Repository(name))

    def _handle_directive(self, directive: Directive) -> None:
        if directive.section is None:
            raise NoSectionError(directive.key)
        if directive.section == OPTIONS_SECTION:
            self._handle_option(directive.section, directive.key, directive.value)
        else:
            self._handle_repository(directive.section, directive.key, directive.value)

    def _handle_repository(self, section: str, key: str, value: str | None) -> None:
        attribute = REPOSITORY_LISTS.get(key)
        if attribute is None:
            logger.debug("Ignoring unknown key %r in section %r", key, section)
            return
        if value is None:
            raise MissingValueError(section, key)
        getattr(self.repos[-1], attribute).append(value)

    def _handle_option(self, section: str, key: str, value: str | None) -> None:
        if key in OPTION_FLAGS:
            setattr(self, OPTION_FLAGS[key], True)
        elif key == "UseDelta":
            self.use_delta = DEFAULT_USE_DELTA if value is None else _parse_float(section, key, value)
        elif key in OPTION_STRINGS or key in OPTION_LISTS or key == "ParallelDownloads":
            if value is None:
                raise MissingValueError(section, key)
            if key in OPTION_STRINGS:
                setattr(self, OPTION_STRINGS[key], value)
            elif key in OPTION_LISTS:
                getattr(self, OPTION_LISTS[key]).append(value)
            else:
                self.parallel_downloads = _parse_int(section, key, value)
        else:
            logger.debug("Ignoring unknown key %r in section %r", key, section)


def _parse_float(section: str, key: str, value: str) -> float:
    # float() also takes digit-group underscores and non-ASCII digits.
    if "_" in value or not value.isascii():
        raise InvalidValueError(section, key, value)
    try:
        return float(value)
    except ValueError as error:
        raise InvalidValueError(section, key, value) from error


def _parse_int(section: str, key: str, value: str) -> int:
    if INTEGER_PATTERN.fullmatch(value) is None:
        raise InvalidValueError(section, key, value)
    return int(value)


@dataclass
class Options:
    """Settings used to locate and run pacman-conf.

    Attributes:
        conf_bin: Helper binary; None means ``pacman-conf`` on ``PATH``.
        pacman_conf: Config file to expand; None means pacman's default.
        root_dir: Alternate root directory; None means pacman's default.

    Examples:
        config = Options().with_pacman_conf("/etc/pacman.conf").with_root_dir("/mnt").read()
    """

    conf_bin: str | None = None
    pacman_conf: str | None = None
    root_dir: str | None = None

    def with_conf_bin(self, path: str) -> Options:
        self.conf_bin = path
        return self

    def with_pacman_conf(self, path: str) -> Options:
        self.pacman_conf = path
        return self

    def with_root_dir(self, path: str) -> Options:
        self.root_dir = path
        return self

    def expand(self) -> str:
        """Expand and dump the config file into a string."""
        return expand_config(self.conf_bin, self.pacman_conf, self.root_dir)

    def read(self) -> PacmanConfig:
        """Expand the config file and parse it into a `PacmanConfig`."""
        return PacmanConfig.from_str(self.expand())
