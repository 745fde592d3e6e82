"""Package-specific exception types.

The parsing engine itself raises nothing: a handler signals failure by raising
and the engine lets that exception through untouched. The types below belong
to the collaborators built on top of the engine.
"""

from __future__ import annotations

from dataclasses import dataclass


class ParseFileError(Exception):
    """Raised when an INI file cannot be read before parsing starts."""


@dataclass(frozen=True)
class ErrorLine:
    """Line number and text of the line that caused an error.

    Attributes:
        number: One-based line number.
        line: The trimmed line text.
    """

    number: int
    line: str


class PacmanConfError(Exception):
    """Base class for errors raised while reading a pacman configuration."""


class DirectiveError(PacmanConfError, ValueError):
    """Raised when a directive cannot be mapped onto the configuration.

    The originating line is attached by the handler once it is known, so the
    message is rendered lazily.

    Attributes:
        line: Line that triggered the error, or None when not yet attached.
    """

    line: ErrorLine | None = None

    def describe(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        message = self.describe()
        if self.line is None:
            return message
        return f"Line {self.line.number}: {message}: {self.line.line}"


class NoSectionError(DirectiveError):
    """Raised when a directive appears before any section.

    Args:
        key: Key of the offending directive.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def describe(self) -> str:
        return f"Key '{self.key}' must appear in a section"


class MissingValueError(DirectiveError):
    """Raised when a key that requires a value is given as a bare flag.

    Args:
        section: Section holding the directive.
        key: Key of the offending directive.
    """

    def __init__(self, section: str, key: str):
        self.section = section
        self.key = key
        super().__init__(section, key)

    def describe(self) -> str:
        return f"Key '{self.key}' in section '{self.section}' requires a value"


class InvalidValueError(DirectiveError):
    """Raised when a value cannot be converted to the field's type.

    Args:
        section: Section holding the directive.
        key: Key of the offending directive.
        value: The value that failed to convert.
    """

    def __init__(self, section: str, key: str, value: str):
        self.section = section
        self.key = key
        self.value = value
        super().__init__(section, key, value)

    def describe(self) -> str:
        return f"Invalid value for '{self.key}' in section '{self.section}': '{self.value}'"


class CommandError(PacmanConfError):
    """Raised when the pacman-conf helper fails to run or exits non-zero.

    Args:
        stderr: Diagnostic text captured from the helper, or the OS error.
    """

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(f"Failed to execute pacman-conf: {stderr}")


class OutputDecodeError(PacmanConfError, UnicodeError):
    """Raised when the helper's output is not valid UTF-8."""
