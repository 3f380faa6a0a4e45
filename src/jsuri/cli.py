"""Typer CLI entrypoint for jsuri."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from jsuri.config import (
    JsUriConfigError,
    JsUriSettings,
    build_versioner,
    load_js_uri_config,
)
from jsuri.errors import MalformedUriError
from jsuri.libraries import DirectoryLibraryRegistry
from jsuri.manager import JsUriManager
from jsuri.models import JsRequest, ProxyRequestBase
from jsuri.params import RenderingContext, ValidityStatus

app = typer.Typer(
    name="jsuri",
    help="Build and inspect versioned extern JS URIs",
    add_completion=False,
)
_CONSOLE = Console()
_LOGGING_CONFIGURED = False
_CONTEXT_CHOICES = [context.name.lower() for context in RenderingContext]
_STATUS_STYLES = {
    ValidityStatus.VALID_VERSIONED: "green",
    ValidityStatus.VALID_UNVERSIONED: "cyan",
    ValidityStatus.INVALID_VERSION: "yellow",
    ValidityStatus.MALFORMED: "red",
}

LibsDirOption = Annotated[
    Path,
    typer.Option(
        "--libs-dir",
        file_okay=False,
        help="Directory holding <library>.js files used for fingerprints.",
    ),
]
ConfigOption = Annotated[
    Path,
    typer.Option("--config", dir_okay=False, help="YAML or JSON URI config file."),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
]


def _configure_logging(verbose: bool) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def _load_settings(config: Path) -> JsUriSettings:
    try:
        return load_js_uri_config(config)
    except JsUriConfigError as exc:
        _CONSOLE.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=2) from exc


def _build_manager(config: Path, libs_dir: Path) -> JsUriManager:
    """Wire settings, directory resolver and versioner into a manager.

    Args:
        config: Config file path; defaults apply when missing.
        libs_dir: Library directory for the resolver.

    Returns:
        Ready-to-use manager.
    """
    settings = _load_settings(config)
    resolver = DirectoryLibraryRegistry(libs_dir)
    return JsUriManager(settings, build_versioner(settings, resolver))


def _request_rows(request: JsRequest) -> list[tuple[str, str]]:
    return [
        ("libs", ", ".join(request.libs) or "-"),
        ("loaded_libs", ", ".join(sorted(request.loaded_libs)) or "-"),
        ("context", request.context.name.lower()),
        ("onload", request.onload or "-"),
        ("jsload", str(request.jsload).lower()),
        ("nohint", str(request.nohint).lower()),
        ("container", request.container),
        ("gadget", request.gadget or "-"),
        ("refresh", "-" if request.refresh is None else str(request.refresh)),
        ("debug", str(request.debug).lower()),
        ("no_cache", str(request.no_cache).lower()),
    ]


@app.command()
def build(
    libs: Annotated[list[str], typer.Argument(help="Libraries, in load order.")],
    container: Annotated[
        str | None, typer.Option("--container", help="Container name.")
    ] = None,
    gadget: Annotated[
        str | None, typer.Option("--gadget", help="Originating gadget identity.")
    ] = None,
    context: Annotated[
        str,
        typer.Option(
            "--context",
            click_type=click.Choice(_CONTEXT_CHOICES, case_sensitive=False),
            help="Rendering context.",
        ),
    ] = "gadget",
    onload: Annotated[
        str | None, typer.Option("--onload", help="Client callback name.")
    ] = None,
    jsload: Annotated[bool, typer.Option("--jsload", help="Deferred load.")] = False,
    nohint: Annotated[bool, typer.Option("--nohint", help="Suppress hints.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Debug bundle.")] = False,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Bypass caches; omits version.")
    ] = False,
    refresh: Annotated[
        int | None, typer.Option("--refresh", min=0, help="Refresh TTL seconds.")
    ] = None,
    libs_dir: LibsDirOption = Path("."),
    config: ConfigOption = Path("jsuri.yaml"),
    verbose: VerboseOption = False,
) -> None:
    """Print the extern JS URI for LIBS."""
    _configure_logging(verbose)
    manager = _build_manager(config, libs_dir)
    request = JsRequest(
        libs=libs,
        context=RenderingContext[context.upper()],
        onload=onload or None,
        jsload=jsload,
        nohint=nohint,
        base=ProxyRequestBase(
            container=container or manager.settings.default_container,
            gadget=gadget or None,
            refresh=refresh,
            debug=debug,
            no_cache=no_cache,
        ),
    )
    typer.echo(manager.make_extern_uri(request))


@app.command()
def inspect(
    uri: Annotated[str, typer.Argument(help="Extern JS URI to parse.")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Emit the parsed request as JSON.")
    ] = False,
    libs_dir: LibsDirOption = Path("."),
    config: ConfigOption = Path("jsuri.yaml"),
    verbose: VerboseOption = False,
) -> None:
    """Parse URI and report its cache validity."""
    _configure_logging(verbose)
    manager = _build_manager(config, libs_dir)
    try:
        request = manager.process_extern_uri(uri)
    except MalformedUriError as exc:
        _CONSOLE.print(f"[bold red]{exc.code}[/bold red]: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(request.model_dump(mode="json"), sort_keys=True))
        return

    status = request.status or ValidityStatus.VALID_UNVERSIONED
    table = Table(title="Extern JS request")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field, value in _request_rows(request):
        table.add_row(field, value)
    table.add_row("status", f"[{_STATUS_STYLES[status]}]{status}[/]")
    _CONSOLE.print(table)


@app.command()
def version(
    libs: Annotated[list[str], typer.Argument(help="Libraries, in load order.")],
    container: Annotated[
        str | None, typer.Option("--container", help="Container name.")
    ] = None,
    gadget: Annotated[
        str | None, typer.Option("--gadget", help="Originating gadget identity.")
    ] = None,
    libs_dir: LibsDirOption = Path("."),
    config: ConfigOption = Path("jsuri.yaml"),
    verbose: VerboseOption = False,
) -> None:
    """Print the version token the configured versioner emits for LIBS."""
    _configure_logging(verbose)
    manager = _build_manager(config, libs_dir)
    if manager.versioner is None:
        _CONSOLE.print("[yellow]Versioning is disabled in this config.[/yellow]")
        raise typer.Exit(code=1)
    container_name = container or manager.settings.default_container
    typer.echo(manager.versioner.compute_version(gadget, container_name, libs))
