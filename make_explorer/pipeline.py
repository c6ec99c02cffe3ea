"""Load pipeline: locate -> read -> classify -> build."""

from __future__ import annotations

import logging
from pathlib import Path

from make_explorer.builder import build_model
from make_explorer.errors import MakefileNotFoundError
from make_explorer.models import ExplorerConfig, ParseResult
from make_explorer.scanner import classify_lines

logger = logging.getLogger(__name__)


def locate_makefile(config: ExplorerConfig) -> Path:
    """Return the explicit build file, or the first default name found in the search dir."""
    if config.makefile is not None:
        if not config.makefile.is_file():
            raise MakefileNotFoundError(config.makefile, "no such file")
        return config.makefile

    for name in config.default_names:
        candidate = config.search_dir / name
        if candidate.is_file():
            return candidate
    raise MakefileNotFoundError(None, f"looked for {', '.join(config.default_names)} in {config.search_dir}")


def parse_text(text: str, source: Path | None = None) -> ParseResult:
    """Parse build-description text into a completed object model."""
    return build_model(classify_lines(text), source=source)


def run_parse(config: ExplorerConfig) -> ParseResult:
    """Locate, read and parse the configured build file."""
    path = locate_makefile(config)
    try:
        text = path.read_text(encoding=config.encoding, errors="replace")
    except OSError as e:
        raise MakefileNotFoundError(path, e.strerror or str(e)) from e

    logger.info("parsing %s", path)
    result = parse_text(text, source=path)
    logger.info(
        "%s: %d line(s), %d rule(s), %d variable(s)",
        path, result.total_lines, len(result.rules), len(result.variables),
    )
    return result
