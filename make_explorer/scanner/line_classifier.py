"""Make line classifier using regex patterns."""

from __future__ import annotations

import re

from make_explorer.models import ClassifiedLine, LineKind
from make_explorer.scanner.base import BaseScanner, ends_with_continuation

_COMMENT_RE = re.compile(r"^\s*#")
_VAR_RE = re.compile(r"^ *([A-Za-z_][A-Za-z0-9_.\-]*)\s*:?=\s*(.*)$")
# Targets never contain ":" or "=", and a separator followed by "=" is an assignment.
_RULE_RE = re.compile(r"^(?!\t)([^:=]+?)(::?)(?![:=])(.*)$")
_CONDITIONAL_RE = re.compile(r"^ *(ifeq|ifneq|ifdef|ifndef)\b\s*(.*)$")
_ELSE_RE = re.compile(r"^\s*else\b\s*(.*)$")
_ENDIF_RE = re.compile(r"^\s*endif\b")
_INCLUDE_RE = re.compile(r"^(?:-|s)?include\s+(.*)$")
_OVERRIDE_RE = re.compile(r"^override\s+(.*)$")
_DEFINE_RE = re.compile(r"^ *define\s+([^\s:+?!=]+)")
_ENDEF_RE = re.compile(r"^\s*endef\b")


class LineClassifier(BaseScanner):
    """Classify physical make lines, first matching pattern wins."""

    def classify(
        self,
        line: str,
        line_number: int,
        pending: LineKind | None = None,
        in_define: bool = False,
    ) -> ClassifiedLine:
        if in_define:
            if _ENDEF_RE.match(line):
                return ClassifiedLine(LineKind.ENDEF, line_number, line)
            return ClassifiedLine(LineKind.DEFINE_BODY, line_number, line, value=line)

        continues = ends_with_continuation(line)
        body = line[:-1] if continues else line

        if pending is not None:
            return ClassifiedLine(
                pending, line_number, line,
                value=body.strip(),
                continues=continues,
                continuation=True,
            )

        if not line.strip():
            return ClassifiedLine(LineKind.BLANK, line_number, line)

        if _COMMENT_RE.match(line):
            return ClassifiedLine(LineKind.COMMENT, line_number, line, continues=continues)

        m = _VAR_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.VAR_DEF, line_number, line,
                name=m.group(1).strip(),
                value=m.group(2).strip(),
                continues=continues,
            )

        m = _RULE_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.RULE_DEF, line_number, line,
                name=m.group(1).strip(),
                separator=m.group(2),
                value=m.group(3).strip(),
                continues=continues,
            )

        if line.startswith("\t"):
            return ClassifiedLine(
                LineKind.CMD_SCRIPT, line_number, line,
                value=body[1:].strip(),
                continues=continues,
            )

        m = _CONDITIONAL_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.CONDITIONAL, line_number, line,
                name=m.group(1),
                value=m.group(2).strip(),
                continues=continues,
            )

        m = _ELSE_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.ELSE, line_number, line,
                value=m.group(1).strip(),
                continues=continues,
            )

        if _ENDIF_RE.match(body):
            return ClassifiedLine(LineKind.ENDIF, line_number, line, continues=continues)

        m = _INCLUDE_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.INCLUDE, line_number, line,
                value=m.group(1).strip(),
                continues=continues,
            )

        m = _OVERRIDE_RE.match(body)
        if m:
            return ClassifiedLine(
                LineKind.OVERRIDE, line_number, line,
                value=m.group(1).strip(),
                continues=continues,
            )

        m = _DEFINE_RE.match(body)
        if m:
            return ClassifiedLine(LineKind.DEFINE, line_number, line, name=m.group(1))

        return ClassifiedLine(LineKind.OTHER, line_number, line, value=line, continues=continues)
