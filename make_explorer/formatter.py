"""Plain-text rendering of parse summaries and query results."""

from __future__ import annotations

from make_explorer.models import (
    ConditionalEvent,
    Diagnostic,
    ParseResult,
    Rule,
    TreeLine,
    Variable,
)

INDENT = "    "


def format_summary(result: ParseResult) -> list[str]:
    source = str(result.source) if result.source else "<text>"
    lines = [f"{source}: {result.total_lines} line(s)"]
    histogram = result.histogram
    width = max(len(kind) for kind in histogram)
    for kind, count in histogram.items():
        lines.append(f"  {kind:<{width}}  {count}")
    lines.append(f"  {len(result.rules)} rule(s), {len(result.variables)} variable(s)")
    return lines


def format_diagnostic(diagnostic: Diagnostic) -> str:
    where = f"line {diagnostic.line_number}" if diagnostic.line_number else "end of file"
    text = f"[{diagnostic.severity.value}] {where}: {diagnostic.message}"
    if diagnostic.text:
        text += f": {diagnostic.text.strip()}"
    return text


def format_trace_event(event: ConditionalEvent) -> str:
    return (
        f"[info] line {event.line_number}: {event.action.value} "
        f"depth={event.depth} label={event.label}"
    )


def format_tree(lines: list[TreeLine]) -> list[str]:
    rendered = []
    for line in lines:
        text = f"{INDENT * line.depth}{line.name}"
        if line.already_visited:
            text += " (visited)"
        rendered.append(text)
    return rendered


def format_unused(names: list[str]) -> list[str]:
    if not names:
        return ["every target has been visited"]
    return [f"{len(names)} unused target(s):"] + [f"  {name}" for name in names]


def format_used_by(name: str, dependents: dict[str, int]) -> list[str]:
    if not dependents:
        return [f"{name}: not a prerequisite of any target"]
    lines = [f"{name} is used by:"]
    for target, count in dependents.items():
        lines.append(f"  {target} ({count})")
    return lines


def format_dump(rule: Rule, phony: bool = False) -> list[str]:
    prerequisites = " ".join(rule.prerequisites) if rule.prerequisites else "(none)"
    lines = [
        f"target:        {rule.target}",
        f"defined at:    line {rule.line_number}",
        f"separator:     {rule.separator}",
        f"prerequisites: {prerequisites}",
        f"phony:         {'yes' if phony else 'no'}",
        f"visited:       {'yes' if rule.visited else 'no'}",
        f"recipe:        {len(rule.recipe)} line(s)",
    ]
    lines.extend(f"\t{command}" for command in rule.recipe)
    return lines


def format_variable(variable: Variable) -> list[str]:
    value_lines = variable.value.split("\n") if variable.value else [""]
    lines = [f"{variable.name} (line {variable.line_number}) = {value_lines[0]}"]
    lines.extend(f"  {extra}" for extra in value_lines[1:])
    return lines
