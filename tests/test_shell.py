"""Tests for the interactive query shell."""

import io
from pathlib import Path

from make_explorer.analysis import DependencyGraphEngine
from make_explorer.pipeline import parse_text
from make_explorer.shell import QueryShell

FIXTURES = Path(__file__).parent / "fixtures"


def _shell(text=None):
    if text is None:
        text = (FIXTURES / "Makefile").read_text()
    return QueryShell(DependencyGraphEngine(parse_text(text)))


def test_inspect_renders_tree():
    shell = _shell()
    assert shell.handle("all\n") == [
        "all",
        "    app",
        "        main.o",
        "        util.o",
        "    docs",
    ]


def test_visited_leaf_is_marked():
    shell = _shell("a: b\nb: a\n")
    assert shell.handle("a")[-1] == "            b (visited)"


def test_unknown_target():
    shell = _shell()
    output = shell.handle("  nosuch  ")
    assert output == ["[warning] nosuch: no explicit rule by that name found"]
    assert shell.engine.history == []


def test_blank_command_ignored():
    assert _shell().handle("   ") == []


def test_unused_before_inspect_gives_guidance():
    output = _shell().handle("_unused_")
    assert len(output) == 1
    assert output[0].startswith("[warning] no targets inspected yet")


def test_unused_after_inspect_and_cleanup():
    shell = _shell("a: b\nb:\nc:\n")
    shell.handle("a")
    assert shell.handle("_unused_") == ["1 unused target(s):", "  c"]
    assert shell.handle("_cleanup_") == ["visited markers and inspection history cleared"]
    assert shell.handle("_unused_") == ["3 unused target(s):", "  a", "  b", "  c"]


def test_used_by():
    shell = _shell("a: b\nc: b\n")
    assert shell.handle("_used_by_ b") == ["b is used by:", "  a (1)", "  c (1)"]
    assert shell.handle("_used_by_ zzz") == ["zzz: not a prerequisite of any target"]
    assert shell.handle("_used_by_") == ["usage: _used_by_ <name>"]


def test_dump():
    output = _shell().handle("_dump_ app")
    assert "target:        app" in output
    assert "prerequisites: main.o util.o" in output
    assert "visited:       no" in output
    assert "\t$(CC) -o $@ $^" in output

    assert "phony:         yes" in _shell().handle("_dump_ clean")
    assert _shell().handle("_dump_ nosuch") == [
        "[warning] nosuch: no explicit rule by that name found",
    ]


def test_var_and_history():
    shell = _shell()
    assert shell.handle("_var_ SRCS") == ["SRCS (line 5) = main.c util.c"]
    assert shell.handle("_var_ NOPE") == ["NOPE: no variable by that name found"]
    assert shell.handle("_history_") == ["no targets inspected yet"]
    shell.handle("docs")
    shell.handle("app")
    assert shell.handle("_history_") == ["1. docs", "2. app"]


def test_help():
    output = _shell().handle("_help_")
    assert any(line.startswith("_used_by_") for line in output)


def test_run_until_end_of_input():
    echoed = []
    shell = QueryShell(
        DependencyGraphEngine(parse_text("a: b\nb:\n")),
        echo=echoed.append,
    )
    prompts = []
    shell.run(io.StringIO("a\nmissing\n_unused_\n"), prompt=lambda: prompts.append(1))

    assert echoed == [
        "a",
        "    b",
        "[warning] missing: no explicit rule by that name found",
        "every target has been visited",
    ]
    assert len(prompts) == 4
