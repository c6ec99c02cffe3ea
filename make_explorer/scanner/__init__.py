"""Scanner entry points."""

from __future__ import annotations

from pathlib import Path

from make_explorer.models import ClassifiedLine
from make_explorer.scanner.base import BaseScanner, ends_with_continuation, split_physical_lines
from make_explorer.scanner.line_classifier import LineClassifier


def classify_lines(text: str) -> list[ClassifiedLine]:
    """Classify every physical line of a build description."""
    return LineClassifier().scan_text(text)


def scan_file(file_path: Path, encoding: str = "utf-8") -> list[ClassifiedLine]:
    return LineClassifier(encoding=encoding).scan_file(file_path)


__all__ = [
    "BaseScanner",
    "LineClassifier",
    "classify_lines",
    "ends_with_continuation",
    "scan_file",
    "split_physical_lines",
]
