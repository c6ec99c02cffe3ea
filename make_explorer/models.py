"""Data models for the make-explorer parser and query engine."""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path


class LineKind(enum.Enum):
    BLANK = "blank"
    COMMENT = "comment"
    VAR_DEF = "var_def"
    RULE_DEF = "rule_def"
    CMD_SCRIPT = "cmd_script"
    CONDITIONAL = "conditional"
    ELSE = "else"
    ENDIF = "endif"
    INCLUDE = "include"
    OVERRIDE = "override"
    DEFINE = "define"
    DEFINE_BODY = "define_body"
    ENDEF = "endef"
    OTHER = "other"


# Kinds reported in the summary histogram, in display order.
HISTOGRAM_KINDS = (
    LineKind.BLANK,
    LineKind.COMMENT,
    LineKind.VAR_DEF,
    LineKind.RULE_DEF,
    LineKind.CMD_SCRIPT,
    LineKind.CONDITIONAL,
    LineKind.INCLUDE,
    LineKind.OVERRIDE,
    LineKind.OTHER,
)

# Directive kinds that are tallied under another histogram bucket.
HISTOGRAM_BUCKET = {
    LineKind.ELSE: LineKind.CONDITIONAL,
    LineKind.ENDIF: LineKind.CONDITIONAL,
    LineKind.DEFINE: LineKind.VAR_DEF,
    LineKind.DEFINE_BODY: LineKind.VAR_DEF,
    LineKind.ENDEF: LineKind.VAR_DEF,
}


class Severity(enum.Enum):
    INFO = "info"
    WARNING = "warning"


class ConditionalAction(enum.Enum):
    OPEN = "open"
    ELSE = "else"
    CLOSE = "close"


@dataclass
class ClassifiedLine:
    """Result from the line classifier."""
    kind: LineKind
    line_number: int
    raw: str
    name: str = ""  # variable name or rule target
    value: str = ""  # variable value, prerequisite text, recipe or directive text
    separator: str = ""  # ":" or "::" for rule headers
    continues: bool = False  # ends in an unescaped backslash
    continuation: bool = False  # continues the previous physical line


@dataclass
class Variable:
    name: str
    value: str
    line_number: int = 0


@dataclass
class Rule:
    target: str
    separator: str = ":"
    prerequisites: list[str] = field(default_factory=list)
    recipe: list[str] = field(default_factory=list)
    line_number: int = 0
    visited: bool = False


@dataclass
class ConditionalEvent:
    action: ConditionalAction
    line_number: int
    depth: int
    label: str


@dataclass
class Diagnostic:
    severity: Severity
    line_number: int
    message: str
    text: str = ""


@dataclass
class TreeLine:
    """One rendered node of an inspection tree."""
    name: str
    depth: int
    already_visited: bool = False


# dependency -> {dependent target -> occurrence count}
ReverseIndex = dict[str, dict[str, int]]


@dataclass
class ParseResult:
    """Completed object model of one build file."""
    source: Path | None = None
    total_lines: int = 0
    variables: dict[str, Variable] = field(default_factory=dict)
    rules: dict[str, Rule] = field(default_factory=dict)
    reverse_index: ReverseIndex = field(default_factory=dict)
    counts: Counter = field(default_factory=Counter)
    conditional_trace: list[ConditionalEvent] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)

    @property
    def histogram(self) -> dict[str, int]:
        return {kind.value: self.counts.get(kind, 0) for kind in HISTOGRAM_KINDS}

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]


@dataclass
class ExplorerConfig:
    """Runtime options for loading and querying a build file."""
    makefile: Path | None = None
    search_dir: Path = field(default_factory=lambda: Path("."))
    default_names: tuple[str, ...] = ("GNUmakefile", "makefile", "Makefile")
    encoding: str = "utf-8"
    show_trace: bool = False
    show_diagnostics: bool = True
