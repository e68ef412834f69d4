# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point listing the translation keys a project uses."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from .collect import build_used_keys_cache
from .config.models import ProjectConfig
from .errors import ConfigError
from .parsers.registry import ParserRegistry

app = typer.Typer(
    name="i18nkeys",
    help="Collect translation keys referenced by JavaScript and Vue sources.",
    add_completion=False,
    no_args_is_help=True,
)


def configure_logging(*, verbose: bool) -> None:
    """Route library log records through a Rich handler on stderr.

    Args:
        verbose: Emit debug records when ``True``; warnings only otherwise.
    """

    root_logger = logging.getLogger("i18nkeys")
    root_logger.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root_logger.propagate = False


@app.command("keys")
def keys_command(
    patterns: list[str] = typer.Argument(..., help="Files, directories or glob patterns to scan."),
    extensions: list[str] | None = typer.Option(
        None,
        "--ext",
        "-e",
        help="Accepted file extension; repeat for several. Defaults to the project configuration.",
    ),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root; defaults to the current directory."),
    as_json: bool = typer.Option(False, "--json", help="Print the keys as a JSON array."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file processing details."),
) -> None:
    """Print every translation key referenced by the selected files."""

    configure_logging(verbose=verbose)
    project_root = (root or Path.cwd()).expanduser().resolve()
    try:
        config = ProjectConfig.load(project_root)
    except ConfigError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=2) from exc
    cache = build_used_keys_cache(project_root, config=config)
    accepted = tuple(extensions) if extensions else config.extensions
    keys = sorted(cache.collect_keys_from_files(patterns, accepted))
    if as_json:
        typer.echo(json.dumps(keys, ensure_ascii=False))
        return
    for key in keys:
        typer.echo(key)


@app.command("parsers")
def parsers_command() -> None:
    """List the parser names that can be selected in configuration."""

    registry = ParserRegistry()
    for name in registry.names():
        marker = " (default)" if name == registry.default else ""
        typer.echo(f"{name}{marker}")


__all__ = ["app", "configure_logging"]
