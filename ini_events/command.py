"""Run the pacman-conf helper and capture its expanded configuration."""

from __future__ import annotations

import logging
import shlex
import subprocess

from .constants import DEFAULT_PACMAN_CONF_BIN
from .exceptions import CommandError, OutputDecodeError

logger = logging.getLogger(__name__)


def build_command(
    conf_bin: str | None = None,
    config: str | None = None,
    root_dir: str | None = None,
) -> list[str]:
    """Assemble the argument vector for pacman-conf.

    Examples:
        build_command(config="/etc/pacman.conf")
        # ["pacman-conf", "--config", "/etc/pacman.conf"]
    """
    args = [conf_bin or DEFAULT_PACMAN_CONF_BIN]
    if root_dir is not None:
        args.extend(["--root", root_dir])
    if config is not None:
        args.extend(["--config", config])
    return args


def _decode(data: bytes, stream: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as error:
        raise OutputDecodeError(f"pacman-conf wrote invalid UTF-8 to {stream}: {error}") from error


def expand_config(
    conf_bin: str | None = None,
    config: str | None = None,
    root_dir: str | None = None,
) -> str:
    """Expand a pacman configuration into plain INI text.

    pacman-conf resolves ``Include`` directives and fills in compiled-in
    defaults, so its output can be parsed without any knowledge of pacman's
    own rules.

    Args:
        conf_bin: Helper to run; defaults to ``pacman-conf`` on ``PATH``.
        config: Config file to expand; defaults to the helper's own default.
        root_dir: Alternate root directory.

    Returns:
        str: The helper's standard output.

    Raises:
        CommandError: If the helper cannot be started or exits non-zero.
        OutputDecodeError: If the helper's output is not valid UTF-8.
    """
    args = build_command(conf_bin, config, root_dir)
    logger.debug("Running %s", shlex.join(args))

    try:
        completed = subprocess.run(args, capture_output=True, check=False)
    except OSError as error:
        logger.warning("Could not start %s: %s", args[0], error)
        raise CommandError(str(error)) from error

    if completed.returncode != 0:
        stderr = _decode(completed.stderr, "stderr")
        logger.warning("%s exited with status %d", args[0], completed.returncode)
        raise CommandError(stderr)

    return _decode(completed.stdout, "stdout")
