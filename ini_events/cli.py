"""
Command line interface for ini-events.
Prints the parse events of an INI file, or reads a pacman configuration through
pacman-conf and prints it as JSON.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import PacmanConfError, ParseFileError
from .filesystem import get_max_file_size, normalize_filepath
from .models import Callback
from .pacman import Options
from .parser import parse_file

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@click.group()
@click.version_option(package_name="ini-events")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
def cli(verbose: bool = False):
    """Parse INI text into a stream of section and directive events."""
    configure_logging(verbose)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def events(filepath: str):
    """
    Print every event parsed from FILEPATH as one JSON object per line.

    Args:
        filepath: Path to the INI file to parse.

    Raises:
        click.BadParameter: If the path is invalid or the configuration is.
        click.ClickException: If the file is too large or cannot be read.

    Examples:
        ini-events events /etc/pacman.conf
    """
    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(path.parent)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    def echo_event(cb: Callback) -> None:
        click.echo(json.dumps(cb.to_dict()))

    try:
        parse_file(path, echo_event, max_file_size)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error


@cli.command()
@click.option("--conf-bin", help="pacman-conf helper to run")
@click.option("--config", "pacman_conf", help="pacman config file to read")
@click.option("--root-dir", help="Alternate pacman root directory")
@click.option("--expand", is_flag=True, help="Print the expanded INI text instead of JSON")
def pacman(
    conf_bin: str | None = None,
    pacman_conf: str | None = None,
    root_dir: str | None = None,
    expand: bool = False,
):
    """
    Read a pacman configuration through pacman-conf.

    Args:
        conf_bin: Override for the helper binary.
        pacman_conf: Config file to expand.
        root_dir: Alternate root directory.
        expand: Print the helper's raw output rather than the parsed config.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If pacman-conf fails or its output cannot be parsed.

    Examples:
        ini-events pacman --config /etc/pacman.conf
    """
    try:
        config = build_config(
            Path.cwd(),
            pacman_conf_bin=conf_bin,
            pacman_conf=pacman_conf,
            root_dir=root_dir,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    options = Options(config.pacman_conf_bin, config.pacman_conf, config.root_dir)
    try:
        if expand:
            click.echo(options.expand(), nl=False)
            return
        pacman_config = options.read()
    except PacmanConfError as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Read %d repositories", len(pacman_config.repos))
    click.echo(json.dumps(dataclasses.asdict(pacman_config), indent=2))


if __name__ == "__main__":
    cli()
