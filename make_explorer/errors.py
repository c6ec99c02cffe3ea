"""Exceptions raised by make-explorer."""

from __future__ import annotations

from pathlib import Path


class MakeExplorerError(Exception):
    """Base class for all make-explorer errors."""


class MakefileNotFoundError(MakeExplorerError):
    """No readable build file could be located at startup."""

    def __init__(self, path: Path | None, reason: str = ""):
        self.path = path
        if path is None:
            message = "no build file given and no default makefile found"
        else:
            message = f"cannot read build file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownTargetError(MakeExplorerError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name}: no explicit rule by that name found")


class NoInspectionHistoryError(MakeExplorerError):
    def __init__(self):
        super().__init__(
            "no targets inspected yet; inspect one or more targets first, "
            "then ask for _unused_"
        )
