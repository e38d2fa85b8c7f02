"""CLI entry point for building audit pivot reports."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from .config import PivotConfig, apply_overrides, default_config, load_config
from .errors import ConfigError, InputReadError
from .session import AggregationSession, console

app = typer.Typer(help="Pivot audit log lines into per-second actor and command counts.")


@app.command()
def run(
    files: Optional[List[Path]] = typer.Argument(
        None,
        help="Audit log files, read in order as one batch (default: stdin)",
    ),
    grammar: Optional[str] = typer.Option(
        None,
        "--grammar",
        "-g",
        help="Line grammar: 'space' or 'tab' (overrides the config file)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file declaring grammar and dimensions",
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report here instead of stdout"),
    summary: bool = typer.Option(False, "--summary", help="Log run statistics to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every rejected line"),
) -> None:
    """Read every input line, then print the actor and command pivot tables."""
    try:
        pivot_config = _resolve_config(config, grammar)
    except ConfigError as exc:
        console.log(f"[red]Invalid configuration[/] {exc}")
        raise typer.Exit(code=1) from exc

    session = AggregationSession(pivot_config, verbose=verbose)
    try:
        if files:
            for path in files:
                session.feed_path(path)
        else:
            stdin = typer.get_text_stream("stdin", encoding="utf-8", errors="replace")
            session.feed(stdin)
    except InputReadError as exc:
        console.log(f"[red]Input error[/] {exc}")
        raise typer.Exit(code=1) from exc

    if summary or verbose:
        session.log_summary()
    if output is None:
        session.write(sys.stdout)
        sys.stdout.flush()
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="\n") as fout:
        session.write(fout)
    if summary or verbose:
        console.log(f"[green]Pivot report written[/] {output}")


def _resolve_config(config_path: Optional[Path], grammar: Optional[str]) -> PivotConfig:
    base = load_config(config_path) if config_path else default_config()
    return apply_overrides(base, grammar=grammar)


if __name__ == "__main__":
    app()
