"""
ini-events: callback based INI parsing.

Instead of building a map, the parser hands each section declaration and
directive to a handler, which stores it in whatever typed structure it owns.

CLI Usage:
    ini-events events /etc/pacman.conf
    ini-events pacman --config /etc/pacman.conf

Library Usage:
    from ini_events import Directive, Ini

    class Settings(Ini):
        def __init__(self):
            self.values = {}

        def callback(self, cb):
            if isinstance(cb.kind, Directive):
                self.values[cb.kind.key] = cb.kind.value

    settings = Settings()
    settings.parse_str("foo = 5\\ncake\\n")
"""

from .exceptions import (
    CommandError,
    DirectiveError,
    ErrorLine,
    InvalidValueError,
    MissingValueError,
    NoSectionError,
    OutputDecodeError,
    PacmanConfError,
    ParseFileError,
)
from .models import Callback, Directive, Event, Section
from .pacman import Options, PacmanConfig, Repository
from .parser import Handler, Ini, parse_file, parse_ini, split_pair

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_ini",
    "parse_file",
    "split_pair",
    "Ini",
    "Handler",
    # Data models
    "Callback",
    "Directive",
    "Event",
    "Section",
    # pacman
    "Options",
    "PacmanConfig",
    "Repository",
    # Exceptions
    "CommandError",
    "DirectiveError",
    "ErrorLine",
    "InvalidValueError",
    "MissingValueError",
    "NoSectionError",
    "OutputDecodeError",
    "PacmanConfError",
    "ParseFileError",
    # Version
    "__version__",
]
