from ini_events.models import Directive, LineKind, ParserContext, Section
from ini_events.parser import (
    _try_enter_section,
    build_event,
    classify_line,
    iter_lines,
    split_pair,
)


def test_iter_lines_numbers_every_physical_line():
    assert list(iter_lines("a\n\n  # note\n b \n")) == [
        (1, "a"),
        (2, ""),
        (3, "# note"),
        (4, "b"),
    ]


def test_iter_lines_handles_missing_trailing_newline_and_crlf():
    assert list(iter_lines("a\r\nb")) == [(1, "a"), (2, "b")]


def test_iter_lines_empty_input():
    assert list(iter_lines("")) == []


def test_blank_and_comment_lines_are_ignorable():
    assert classify_line("").ignorable
    assert classify_line("#comment").ignorable
    assert not classify_line("key # not a comment").ignorable
    assert not classify_line("[section]").ignorable


def test_build_event_skips_ignorable_lines_without_touching_context():
    ctx = ParserContext(section="core")

    assert build_event(ctx, "# [extra]") is None
    assert build_event(ctx, "") is None
    assert ctx.section == "core"


def test_classify_line():
    assert classify_line("") is LineKind.BLANK
    assert classify_line("# [core]") is LineKind.COMMENT
    assert classify_line("[core]") is LineKind.SECTION
    assert classify_line("[]") is LineKind.SECTION
    assert classify_line("[a]b]") is LineKind.SECTION
    assert classify_line("[") is LineKind.DIRECTIVE
    assert classify_line("]") is LineKind.DIRECTIVE
    assert classify_line("[core") is LineKind.DIRECTIVE
    assert classify_line("Server = x") is LineKind.DIRECTIVE


def test_split_pair_distinguishes_flag_from_empty_value():
    assert split_pair("Color") == ("Color", None)
    assert split_pair("XferCommand=") == ("XferCommand", "")
    assert split_pair("XferCommand = ") == ("XferCommand", "")


def test_split_pair_uses_first_separator_only():
    assert split_pair("Server = http://host/?a=b") == ("Server", "http://host/?a=b")
    assert split_pair("= value") == ("", "value")


def test_try_enter_section_updates_context():
    ctx = ParserContext()

    assert _try_enter_section(ctx, "Color") is None
    assert ctx.section is None

    assert _try_enter_section(ctx, "[options]") == Section("options")
    assert ctx.section == "options"

    assert _try_enter_section(ctx, "[core]") == Section("core")
    assert ctx.section == "core"


def test_build_event_attaches_active_section():
    ctx = ParserContext()

    assert build_event(ctx, "cake") == Directive(None, "cake", None)
    assert build_event(ctx, "") is None
    assert build_event(ctx, "#x") is None
    assert build_event(ctx, "[nom]") == Section("nom")
    assert build_event(ctx, "amount = 23") == Directive("nom", "amount", "23")
    assert ctx.section == "nom"
