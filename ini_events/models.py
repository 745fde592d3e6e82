"""Data models for ini-events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class LineKind(Enum):
    """Classification of a single trimmed INI line.

    Attributes:
        BLANK: Empty after trimming; produces no event.
        COMMENT: Starts with ``#``; produces no event.
        SECTION: A ``[name]`` section declaration.
        DIRECTIVE: A ``key`` or ``key = value`` line.
    """

    BLANK = auto()
    COMMENT = auto()
    SECTION = auto()
    DIRECTIVE = auto()

    @property
    def ignorable(self) -> bool:
        return self in (LineKind.BLANK, LineKind.COMMENT)


@dataclass(frozen=True)
class Section:
    """A section declaration.

    Attributes:
        name: Text strictly between the opening ``[`` and closing ``]``.
    """

    name: str


@dataclass(frozen=True)
class Directive:
    """A directive belonging to the active section, if any.

    Attributes:
        section: Name of the most recently declared section, or None when the
            directive appears before any section.
        key: Text before the first ``=``, trailing whitespace removed.
        value: Text after the first ``=``, leading whitespace removed. None
            when the line has no ``=`` at all; an empty string for ``key=``.
    """

    section: str | None
    key: str
    value: str | None


Event = Union[Section, Directive]


@dataclass(frozen=True)
class Callback:
    """Event delivered to a handler together with its line context.

    Attributes:
        filename: Source name shared by the whole parse call, or None.
        line: The line text with surrounding whitespace trimmed.
        line_number: One-based position of the line in the original text,
            counting blank and comment lines.
        kind: The parsed event.
    """

    filename: str | None
    line: str
    line_number: int
    kind: Event

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "filename": self.filename,
            "line_number": self.line_number,
            "line": self.line,
        }
        if isinstance(self.kind, Section):
            data.update(kind="section", name=self.kind.name)
        else:
            data.update(
                kind="directive",
                section=self.kind.section,
                key=self.kind.key,
                value=self.kind.value,
            )
        return data


@dataclass
class ParserContext:
    """Section-tracking state carried across the lines of one parse call.

    Attributes:
        section: Name of the active section, or None before the first section
            declaration.
    """

    section: str | None = None
