"""Event-dispatch INI parsing engine.

The engine never builds a map of the parsed content. Instead it walks the
text once and hands every section declaration and directive to a handler,
which owns whatever typed representation it likes. A handler reports failure
by raising; the exception stops the pass and reaches the caller unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from pathlib import Path

from .constants import (
    COMMENT_PREFIX,
    LINE_SEPARATOR,
    PAIR_SEPARATOR,
    SECTION_END,
    SECTION_START,
)
from .exceptions import ParseFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    safe_read,
)
from .models import Callback, Directive, Event, LineKind, ParserContext, Section

logger = logging.getLogger(__name__)

Handler = Callable[[Callback], None]


def iter_lines(content: str) -> Iterator[tuple[int, str]]:
    """Yield every physical line with its one-based number, trimmed.

    Blank and comment lines are yielded too so that numbering always reflects
    the position in the original text.

    Examples:
        list(iter_lines("a\\n\\n b "))  # [(1, "a"), (2, ""), (3, "b")]
    """
    if not content:
        return
    lines = content.split(LINE_SEPARATOR)
    # A terminating newline does not start another line.
    if lines[-1] == "":
        lines.pop()
    for line_number, line in enumerate(lines, start=1):
        yield line_number, line.strip()


def classify_line(line: str) -> LineKind:
    """Decide what kind of event, if any, a trimmed line produces.

    Examples:
        classify_line("[core]")  # LineKind.SECTION
        classify_line("Color")  # LineKind.DIRECTIVE
    """
    if not line:
        return LineKind.BLANK
    if line.startswith(COMMENT_PREFIX):
        return LineKind.COMMENT
    if len(line) >= 2 and line.startswith(SECTION_START) and line.endswith(SECTION_END):
        return LineKind.SECTION
    return LineKind.DIRECTIVE


def split_pair(line: str) -> tuple[str, str | None]:
    """Split a directive line on its first ``=``.

    Args:
        line: Trimmed directive line.

    Returns:
        tuple[str, str | None]: The key with trailing whitespace removed and
            the value with leading whitespace removed. The value is None when
            the line holds no ``=`` and an empty string when nothing follows it.

    Examples:
        split_pair("Server = http://mirror")  # ("Server", "http://mirror")
        split_pair("Color")  # ("Color", None)
        split_pair("XferCommand =")  # ("XferCommand", "")
    """
    key, separator, value = line.partition(PAIR_SEPARATOR)
    if not separator:
        return line, None
    return key.rstrip(), value.lstrip()


def _try_enter_section(ctx: ParserContext, line: str) -> Section | None:
    """Switch the active section when the line declares one.

    Args:
        ctx: Parser context holding the active section.
        line: Trimmed, non-ignorable line.

    Returns:
        Section | None: The declared section, or None for a directive line.
    """
    if classify_line(line) is not LineKind.SECTION:
        return None

    section = Section(line[1:-1])
    ctx.section = section.name
    return section


def build_event(ctx: ParserContext, line: str) -> Event | None:
    """Build the event for a trimmed line, updating the section state.

    Returns:
        Event | None: None for blank and comment lines.
    """
    if classify_line(line).ignorable:
        return None

    section = _try_enter_section(ctx, line)
    if section is not None:
        return section

    key, value = split_pair(line)
    return Directive(ctx.section, key, value)


def parse_ini(
    content: str,
    handler: Ini | Handler,
    filename: str | None = None,
) -> None:
    """Parse INI text, dispatching one callback per section or directive.

    Events are delivered in line order. The first exception raised by the
    handler ends the pass; no later line is looked at and the exception
    propagates as-is.

    Args:
        content: The complete INI text.
        handler: An `Ini` instance or any callable accepting a `Callback`.
        filename: Optional source name attached to every callback.

    Raises:
        Exception: Whatever the handler raises.

    Examples:
        events = []
        parse_ini("[core]\\nServer = http://mirror\\n", events.append)
    """
    callback = handler.callback if isinstance(handler, Ini) else handler
    ctx = ParserContext()
    dispatched = 0

    logger.debug("Parsing %s", filename or "<string>")
    for line_number, line in iter_lines(content):
        event = build_event(ctx, line)
        if event is None:
            continue

        try:
            callback(Callback(filename, line, line_number, event))
        except Exception:
            logger.debug("Handler aborted %s at line %d", filename or "<string>", line_number)
            raise
        dispatched += 1

    logger.debug("Parsed %s: %d events", filename or "<string>", dispatched)


class Ini(ABC):
    """Base class for objects populated from INI text.

    Subclasses implement `callback`, which receives every parsed event and
    may raise to abort the parse. The same instance can be fed several texts
    in turn; each parse starts again with no active section.

    Examples:
        class Flags(Ini):
            def __init__(self):
                self.enabled = set()

            def callback(self, cb):
                if isinstance(cb.kind, Directive) and cb.kind.value is None:
                    self.enabled.add(cb.kind.key)

        flags = Flags()
        flags.parse_str("Color\\nCheckSpace\\n")
    """

    @abstractmethod
    def callback(self, cb: Callback) -> None:
        """Handle a single parsed event."""

    def parse_str(self, content: str) -> None:
        """Parse INI text into this object."""
        parse_ini(content, self)

    def parse(self, content: str, filename: str | None = None) -> None:
        """Parse INI text into this object, naming its source.

        The text still has to be read by the caller; `filename` only ends up
        on each `Callback` so that error messages can mention it.
        """
        parse_ini(content, self, filename)


def parse_file(
    filepath: Path,
    handler: Ini | Handler,
    max_file_size: int | None = None,
) -> None:
    """Read an INI file and parse it against a handler.

    Args:
        filepath: Path to the file.
        handler: An `Ini` instance or callable receiving each `Callback`.
        max_file_size: Size limit in bytes; defaults to the
            ``INI_EVENTS_MAX_FILE_SIZE`` environment variable or 10 MiB.

    Raises:
        ParseFileError: If the file is missing, too large, not a regular file,
            or not valid UTF-8.
        Exception: Whatever the handler raises, unchanged.

    Examples:
        parse_file(Path("/etc/pacman.conf"), events.append)
    """
    try:
        limit = get_max_file_size() if max_file_size is None else max_file_size
    except ValueError as error:
        raise ParseFileError(str(error)) from error
    if limit <= 0:
        raise ParseFileError("`max_file_size` override must be a positive integer")

    try:
        enforce_file_size(collect_file_stat(filepath), limit, filepath)
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    parse_ini(content, handler, str(filepath))
