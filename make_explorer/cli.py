"""Click CLI with summary, shell, and inspect subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from make_explorer import __version__, formatter
from make_explorer.analysis import DependencyGraphEngine
from make_explorer.errors import MakeExplorerError
from make_explorer.models import ExplorerConfig, ParseResult, Severity
from make_explorer.pipeline import run_parse
from make_explorer.shell import QueryShell

_SEVERITY_COLORS = {
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
}

_makefile_argument = click.argument(
    "makefile",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """make-explorer: Parse a makefile and explore its dependency graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config: ExplorerConfig) -> ParseResult:
    try:
        return run_parse(config)
    except MakeExplorerError as e:
        raise click.ClickException(str(e))


def _echo_report(result: ParseResult, config: ExplorerConfig) -> None:
    for line in formatter.format_summary(result):
        click.echo(line)
    if config.show_trace:
        for event in result.conditional_trace:
            click.echo(click.style(formatter.format_trace_event(event), fg="cyan"))
    if config.show_diagnostics:
        for diagnostic in result.diagnostics:
            click.echo(click.style(
                formatter.format_diagnostic(diagnostic),
                fg=_SEVERITY_COLORS[diagnostic.severity],
            ))


@cli.command()
@_makefile_argument
@click.option("--trace", is_flag=True, help="Show the conditional nesting trace")
@click.option("--quiet", "-q", is_flag=True, help="Hide diagnostics")
@click.option("--json", "as_json", is_flag=True, help="Emit the summary as JSON")
def summary(makefile: Path | None, trace: bool, quiet: bool, as_json: bool):
    """Parse a makefile and print a line-kind histogram."""
    config = ExplorerConfig(makefile=makefile, show_trace=trace, show_diagnostics=not quiet)
    result = _load(config)

    if as_json:
        data = {
            "source": str(result.source),
            "total_lines": result.total_lines,
            "histogram": result.histogram,
            "rules": len(result.rules),
            "variables": len(result.variables),
            "includes": result.includes,
            "diagnostics": [
                {"severity": d.severity.value, "line": d.line_number, "message": d.message}
                for d in result.diagnostics
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    _echo_report(result, config)


@cli.command()
@_makefile_argument
@click.option("--quiet", "-q", is_flag=True, help="Hide diagnostics")
def shell(makefile: Path | None, quiet: bool):
    """Parse a makefile, then answer queries read from stdin."""
    config = ExplorerConfig(makefile=makefile, show_diagnostics=not quiet)
    result = _load(config)
    _echo_report(result, config)

    def prompt():
        click.echo("> ", nl=False)

    stdin = click.get_text_stream("stdin")
    interactive = stdin.isatty()
    if interactive:
        click.echo("Type a target name, or _help_ for commands.")

    engine = DependencyGraphEngine(result)
    QueryShell(engine, echo=click.echo).run(stdin, prompt=prompt if interactive else None)


@cli.command()
@click.argument("makefile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("targets", nargs=-1, required=True)
@click.option("--unused", "show_unused", is_flag=True, help="List unused targets afterwards")
def inspect(makefile: Path, targets: tuple[str, ...], show_unused: bool):
    """Print the dependency tree of one or more targets."""
    result = _load(ExplorerConfig(makefile=makefile))
    engine = DependencyGraphEngine(result)

    for target in targets:
        try:
            lines = formatter.format_tree(engine.inspect(target))
        except MakeExplorerError as e:
            click.echo(click.style(f"[warning] {e}", fg="yellow"))
            continue
        for line in lines:
            click.echo(line)

    if show_unused and engine.history:
        for line in formatter.format_unused(engine.unused()):
            click.echo(line)


if __name__ == "__main__":
    cli()
