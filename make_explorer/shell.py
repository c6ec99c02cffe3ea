"""Line-oriented interactive query shell over a DependencyGraphEngine."""

from __future__ import annotations

from typing import Callable, Iterable

from make_explorer.analysis import DependencyGraphEngine
from make_explorer.errors import MakeExplorerError
from make_explorer import formatter

HELP = [
    "<target>            show the dependency tree of target",
    "_unused_            list targets not reached by any inspection",
    "_used_by_ <name>    list targets that depend on name",
    "_dump_ <target>     show the stored rule for target",
    "_var_ <name>        show a variable definition",
    "_history_           list inspected targets",
    "_cleanup_           forget visited targets and history",
    "_help_              show this help",
]


class QueryShell:
    """Dispatch one command per input line; errors are reported, never fatal."""

    def __init__(self, engine: DependencyGraphEngine, echo: Callable[[str], None] = print):
        self.engine = engine
        self.echo = echo
        self._commands: dict[str, Callable[[str], list[str]]] = {
            "_cleanup_": self._cleanup,
            "_unused_": self._unused,
            "_used_by_": self._used_by,
            "_dump_": self._dump,
            "_var_": self._var,
            "_history_": self._history,
            "_help_": self._help,
        }

    def handle(self, command: str) -> list[str]:
        """Run one command and return its output lines."""
        command = command.strip()
        if not command:
            return []
        word, _, argument = command.partition(" ")
        action = self._commands.get(word)
        try:
            if action is not None:
                return action(argument.strip())
            return formatter.format_tree(self.engine.inspect(command))
        except MakeExplorerError as e:
            return [f"[warning] {e}"]

    def run(self, stream: Iterable[str], prompt: Callable[[], None] | None = None) -> None:
        """Read commands until the stream is exhausted."""
        if prompt:
            prompt()
        for raw in stream:
            for line in self.handle(raw):
                self.echo(line)
            if prompt:
                prompt()

    # ── Commands ─────────────────────────────────────────────

    def _cleanup(self, argument: str) -> list[str]:
        self.engine.cleanup()
        return ["visited markers and inspection history cleared"]

    def _unused(self, argument: str) -> list[str]:
        return formatter.format_unused(self.engine.unused())

    def _used_by(self, argument: str) -> list[str]:
        if not argument:
            return ["usage: _used_by_ <name>"]
        return formatter.format_used_by(argument, self.engine.used_by(argument))

    def _dump(self, argument: str) -> list[str]:
        if not argument:
            return ["usage: _dump_ <target>"]
        rule = self.engine.dump(argument)
        return formatter.format_dump(rule, phony=self.engine.is_phony(argument))

    def _var(self, argument: str) -> list[str]:
        if not argument:
            return ["usage: _var_ <name>"]
        variable = self.engine.variable(argument)
        if variable is None:
            return [f"{argument}: no variable by that name found"]
        return formatter.format_variable(variable)

    def _history(self, argument: str) -> list[str]:
        history = self.engine.history
        if not history:
            return ["no targets inspected yet"]
        return [f"{i}. {name}" for i, name in enumerate(history, start=1)]

    def _help(self, argument: str) -> list[str]:
        return list(HELP)
