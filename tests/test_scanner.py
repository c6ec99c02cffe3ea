"""Tests for the line classifier."""

from pathlib import Path

from make_explorer.models import LineKind
from make_explorer.scanner import (
    classify_lines,
    ends_with_continuation,
    scan_file,
    split_physical_lines,
)
from make_explorer.scanner.line_classifier import LineClassifier

FIXTURES = Path(__file__).parent / "fixtures"


def _classify(line, pending=None):
    return LineClassifier().classify(line, 1, pending=pending)


def test_blank_lines():
    assert _classify("").kind == LineKind.BLANK
    assert _classify("   ").kind == LineKind.BLANK
    assert _classify("\t").kind == LineKind.BLANK


def test_comment():
    assert _classify("# top level").kind == LineKind.COMMENT
    assert _classify("   # indented").kind == LineKind.COMMENT


def test_variable_definitions():
    line = _classify("CC = gcc")
    assert line.kind == LineKind.VAR_DEF
    assert line.name == "CC"
    assert line.value == "gcc"

    line = _classify("  FLAGS  :=  -O2 -g  ")
    assert line.kind == LineKind.VAR_DEF
    assert line.name == "FLAGS"
    assert line.value == "-O2 -g"

    assert _classify("X:=").value == ""


def test_rule_definitions():
    line = _classify("all: app docs")
    assert line.kind == LineKind.RULE_DEF
    assert line.name == "all"
    assert line.separator == ":"
    assert line.value == "app docs"

    line = _classify("lib.a :: one.o")
    assert line.separator == "::"
    assert line.name == "lib.a"

    assert _classify(".PHONY: all").name == ".PHONY"


def test_inline_recipe_is_kept_as_prerequisite_text():
    line = _classify("run: prog ; ./prog")
    assert line.kind == LineKind.RULE_DEF
    assert line.value == "prog ; ./prog"


def test_assignment_is_not_a_rule_separator():
    assert _classify("override CFLAGS := -g").kind == LineKind.OVERRIDE
    assert _classify("CFLAGS += -g").kind == LineKind.OTHER


def test_recipe_requires_leading_tab():
    line = _classify("\techo a:b")
    assert line.kind == LineKind.CMD_SCRIPT
    assert line.value == "echo a:b"

    assert _classify("\tCC=gcc").kind == LineKind.CMD_SCRIPT
    assert _classify("    echo hello").kind == LineKind.OTHER


def test_conditional_directives():
    line = _classify("ifdef DEBUG")
    assert line.kind == LineKind.CONDITIONAL
    assert line.name == "ifdef"
    assert line.value == "DEBUG"

    assert _classify("  ifneq ($(A),1)").kind == LineKind.CONDITIONAL
    assert _classify("\tifdef DEBUG").kind == LineKind.CMD_SCRIPT

    line = _classify("else ifeq ($(OS),Linux)")
    assert line.kind == LineKind.ELSE
    assert line.value == "ifeq ($(OS),Linux)"
    assert _classify("else").value == ""
    assert _classify("endif").kind == LineKind.ENDIF


def test_include_override_define_other():
    assert _classify("include rules.mk").kind == LineKind.INCLUDE
    assert _classify("-include $(DEPS)").kind == LineKind.INCLUDE
    assert _classify("sinclude local.mk").kind == LineKind.INCLUDE
    assert _classify("override X = 1").kind == LineKind.OVERRIDE

    line = _classify("define RECIPE")
    assert line.kind == LineKind.DEFINE
    assert line.name == "RECIPE"

    line = _classify("$(info hello)")
    assert line.kind == LineKind.OTHER
    assert line.value == "$(info hello)"


def test_continuation_marker():
    assert ends_with_continuation("SRCS = a.c \\")
    assert not ends_with_continuation("SRCS = a.c \\\\")
    assert not ends_with_continuation("SRCS = a.c")

    line = _classify("SRCS = a.c \\")
    assert line.continues
    assert line.value == "a.c"


def test_continuation_keeps_kind_of_previous_line():
    lines = classify_lines("SRCS = a.c \\\n\tb.c \\\nall: c.c\n")
    assert [l.kind for l in lines] == [LineKind.VAR_DEF] * 3
    assert lines[1].continuation
    assert lines[1].value == "b.c"
    assert lines[2].continuation
    assert lines[2].value == "all: c.c"
    assert not lines[2].continues


def test_define_block_lines():
    lines = classify_lines("define BODY\nall: x\n\techo\nendef\nall: y\n")
    kinds = [l.kind for l in lines]
    assert kinds == [
        LineKind.DEFINE,
        LineKind.DEFINE_BODY,
        LineKind.DEFINE_BODY,
        LineKind.ENDEF,
        LineKind.RULE_DEF,
    ]


def test_split_physical_lines():
    assert split_physical_lines("a\r\nb\n") == ["a", "b"]
    assert split_physical_lines("a\n\nb") == ["a", "", "b"]
    assert split_physical_lines("") == []
    assert len(classify_lines("a: b\n\n\tc\n")) == 3


def test_scan_fixture():
    lines = scan_file(FIXTURES / "Makefile")
    assert len(lines) == 36
    assert [l.line_number for l in lines] == list(range(1, 37))
    assert lines[0].kind == LineKind.COMMENT
    assert lines[3].kind == LineKind.VAR_DEF
    assert lines[3].continuation
