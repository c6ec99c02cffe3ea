"""Object model builder: turns classified lines into variables, rules and indexes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from make_explorer.models import (
    HISTOGRAM_BUCKET,
    ClassifiedLine,
    ConditionalAction,
    ConditionalEvent,
    Diagnostic,
    LineKind,
    ParseResult,
    Rule,
    Severity,
    Variable,
)

logger = logging.getLogger(__name__)

TOP_LEVEL = "-"


@dataclass
class ParseState:
    """Mutable state for one forward pass over a file."""
    entity_kind: LineKind | None = None  # VAR_DEF or RULE_DEF
    entity_name: str | None = None
    current_rule: str | None = None
    pending: bool = False
    depth: int = 0
    label: str = TOP_LEVEL
    define_name: str | None = None
    define_body: list[str] = field(default_factory=list)


class ModelBuilder:
    """Build a ParseResult from classified lines in a single forward pass."""

    def __init__(self, source: Path | None = None):
        self.result = ParseResult(source=source)
        self.state = ParseState()

    def build(self, lines: list[ClassifiedLine]) -> ParseResult:
        for line in lines:
            self.feed(line)
        self.finish()
        return self.result

    def feed(self, line: ClassifiedLine) -> None:
        self.result.total_lines += 1
        self.result.counts[HISTOGRAM_BUCKET.get(line.kind, line.kind)] += 1

        if line.continuation and self.state.pending:
            self._continue(line)
        else:
            handler = getattr(self, f"_on_{line.kind.value}")
            handler(line)

        self.state.pending = line.continues

    def finish(self) -> None:
        state = self.state
        if state.define_name is not None:
            self._warn(0, f"define {state.define_name} not terminated by endef")
            self._close_define()
        if state.depth > 0:
            self._warn(0, f"{state.depth} conditional(s) still open at end of file ({state.label})")

    # ── Definitions ──────────────────────────────────────────

    def _on_var_def(self, line: ClassifiedLine) -> None:
        variables = self.result.variables
        previous = variables.get(line.name)
        if previous is not None:
            self._warn(
                line.line_number,
                f"variable {line.name} redefined (previous definition at line {previous.line_number})",
            )
        variables[line.name] = Variable(line.name, line.value, line.line_number)
        self._set_entity(LineKind.VAR_DEF, line.name)

    def _on_rule_def(self, line: ClassifiedLine) -> None:
        rules = self.result.rules
        rule = rules.get(line.name)
        if rule is None:
            rule = Rule(target=line.name, separator=line.separator, line_number=line.line_number)
            rules[line.name] = rule
        else:
            self._warn(
                line.line_number,
                f"target {line.name} redefined (previous definition at line {rule.line_number})",
            )
        self._add_prerequisites(rule, line.value)
        self._set_entity(LineKind.RULE_DEF, line.name)
        self.state.current_rule = line.name

    def _on_cmd_script(self, line: ClassifiedLine) -> None:
        rule = self._rule(self.state.current_rule)
        if rule is None:
            self._warn(line.line_number, "recipe line before first target", line.raw)
            return
        rule.recipe.append(line.value)

    def _on_define(self, line: ClassifiedLine) -> None:
        previous = self.result.variables.get(line.name)
        if previous is not None:
            self._warn(
                line.line_number,
                f"variable {line.name} redefined (previous definition at line {previous.line_number})",
            )
        self.result.variables[line.name] = Variable(line.name, "", line.line_number)
        self.state.define_name = line.name
        self.state.define_body = []
        self._set_entity(LineKind.VAR_DEF, line.name)

    def _on_define_body(self, line: ClassifiedLine) -> None:
        self.state.define_body.append(line.value)

    def _on_endef(self, line: ClassifiedLine) -> None:
        if self.state.define_name is None:
            self._warn(line.line_number, "endef without define", line.raw)
            return
        self._close_define()

    # ── Continuations ────────────────────────────────────────

    def _continue(self, line: ClassifiedLine) -> None:
        state = self.state
        if line.kind is LineKind.VAR_DEF and state.entity_kind is LineKind.VAR_DEF:
            variable = self.result.variables[state.entity_name]
            if line.value:
                variable.value = f"{variable.value} {line.value}" if variable.value else line.value
        elif line.kind is LineKind.RULE_DEF and state.entity_kind is LineKind.RULE_DEF:
            self._add_prerequisites(self.result.rules[state.entity_name], line.value)
        elif line.kind is LineKind.CMD_SCRIPT and self._rule(state.current_rule) is not None:
            self.result.rules[state.current_rule].recipe.append(line.value)
        else:
            self._warn(line.line_number, f"stray continuation of {line.kind.value} line discarded", line.raw)

    # ── Conditionals ─────────────────────────────────────────

    def _on_conditional(self, line: ClassifiedLine) -> None:
        state = self.state
        state.depth += 1
        state.label = f"{line.line_number}:{line.value or 'none'}"
        self._trace(ConditionalAction.OPEN, line)

    def _on_else(self, line: ClassifiedLine) -> None:
        self.state.label = f"{line.line_number}:{line.value or 'none'}"
        self._trace(ConditionalAction.ELSE, line)

    def _on_endif(self, line: ClassifiedLine) -> None:
        state = self.state
        state.depth -= 1
        if state.depth == 0:
            state.label = TOP_LEVEL
        elif state.depth < 0:
            self._warn(line.line_number, f"endif without matching conditional (depth {state.depth})")
        self._trace(ConditionalAction.CLOSE, line)

    # ── Everything else ──────────────────────────────────────

    def _on_blank(self, line: ClassifiedLine) -> None:
        pass

    def _on_comment(self, line: ClassifiedLine) -> None:
        pass

    def _on_include(self, line: ClassifiedLine) -> None:
        self.result.includes.append(line.value)
        self._note(line.line_number, f"include not followed: {line.value}")

    def _on_override(self, line: ClassifiedLine) -> None:
        self._note(line.line_number, "override directive not evaluated", line.raw)

    def _on_other(self, line: ClassifiedLine) -> None:
        self._warn(line.line_number, "unrecognized line", line.raw)

    # ── Helpers ──────────────────────────────────────────────

    def _add_prerequisites(self, rule: Rule, text: str) -> None:
        reverse = self.result.reverse_index
        for token in text.split():
            rule.prerequisites.append(token)
            dependents = reverse.setdefault(token, {})
            dependents[rule.target] = dependents.get(rule.target, 0) + 1

    def _close_define(self) -> None:
        state = self.state
        self.result.variables[state.define_name].value = "\n".join(state.define_body)
        state.define_name = None
        state.define_body = []

    def _rule(self, name: str | None) -> Rule | None:
        if name is None:
            return None
        return self.result.rules.get(name)

    def _set_entity(self, kind: LineKind, name: str) -> None:
        self.state.entity_kind = kind
        self.state.entity_name = name

    def _trace(self, action: ConditionalAction, line: ClassifiedLine) -> None:
        event = ConditionalEvent(action, line.line_number, self.state.depth, self.state.label)
        self.result.conditional_trace.append(event)
        logger.debug("%s depth=%d label=%s", action.value, event.depth, event.label)

    def _warn(self, line_number: int, message: str, text: str = "") -> None:
        self.result.diagnostics.append(Diagnostic(Severity.WARNING, line_number, message, text))
        logger.debug("line %d: %s", line_number, message)

    def _note(self, line_number: int, message: str, text: str = "") -> None:
        self.result.diagnostics.append(Diagnostic(Severity.INFO, line_number, message, text))
        logger.debug("line %d: %s", line_number, message)


def build_model(lines: list[ClassifiedLine], source: Path | None = None) -> ParseResult:
    """Run one builder pass over classified lines."""
    return ModelBuilder(source=source).build(lines)
