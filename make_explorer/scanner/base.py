"""Abstract base scanner: physical line splitting and continuation tracking."""

from __future__ import annotations

import abc
from pathlib import Path

from make_explorer.models import ClassifiedLine, LineKind


def split_physical_lines(text: str) -> list[str]:
    """Split text on newlines without treating other control characters as breaks."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def ends_with_continuation(line: str) -> bool:
    """True if the line ends in an odd run of backslashes."""
    run = len(line) - len(line.rstrip("\\"))
    return run % 2 == 1


class BaseScanner(abc.ABC):
    """Base class for line scanners."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    @abc.abstractmethod
    def classify(
        self,
        line: str,
        line_number: int,
        pending: LineKind | None = None,
        in_define: bool = False,
    ) -> ClassifiedLine:
        """Classify one physical line given the state left by the previous one."""

    def scan_text(self, text: str) -> list[ClassifiedLine]:
        """Classify every physical line of text in order."""
        classified: list[ClassifiedLine] = []
        pending: LineKind | None = None
        in_define = False

        for line_number, line in enumerate(split_physical_lines(text), start=1):
            result = self.classify(line, line_number, pending=pending, in_define=in_define)
            classified.append(result)

            if result.kind is LineKind.DEFINE:
                in_define = True
            elif result.kind is LineKind.ENDEF:
                in_define = False

            pending = result.kind if result.continues else None

        return classified

    def scan_file(self, file_path: Path) -> list[ClassifiedLine]:
        source = file_path.read_text(encoding=self.encoding, errors="replace")
        return self.scan_text(source)
