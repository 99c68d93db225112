# src/servergen/cli.py
"""servergen Command Line Interface.

Entry point for the servergen CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

import typer
import yaml
from pydantic import ValidationError

from servergen import __version__
from servergen.contracts import ServerGenError
from servergen.core.config import GeneratorSettings, load_settings
from servergen.core.document import load_document, parse_nodes
from servergen.core.graph import ServerGraph
from servergen.core.resolver import resolve
from servergen.core.validation import validate_document
from servergen.pipeline import generate_server

__all__ = ["app"]

app = typer.Typer(
    name="servergen",
    help="servergen: generate Express servers from graph descriptions.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"servergen version {__version__}")
        raise typer.Exit()


def _format_validation_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error panel on stderr."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message)

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    console.print(Panel(content, title=f"[red bold]{title}[/]", border_style="red"))


def _load_generator_settings(settings_path: Path | None) -> GeneratorSettings:
    try:
        return load_settings(settings_path.expanduser() if settings_path is not None else None)
    except yaml.YAMLError as e:
        _format_validation_error(
            title="YAML Syntax Error",
            message=f"Failed to parse {settings_path.name if settings_path is not None else 'settings'}",
            details=[str(e.problem)] if getattr(e, "problem", None) else None,
            hint="Check for unclosed brackets, incorrect indentation, or invalid characters.",
        )
        raise typer.Exit(1) from None
    except FileNotFoundError:
        _format_validation_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings_path}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_validation_error(
            title="Settings Validation Failed",
            message="Invalid generator settings",
            details=details,
            hint="Check field names, types, and required values.",
        )
        raise typer.Exit(1) from None
    except ValueError as e:
        # After ValidationError, which subclasses ValueError
        _format_validation_error(
            title="Invalid Settings File",
            message=str(e),
            hint="Settings files hold top-level keys such as port and default_output.",
        )
        raise typer.Exit(1) from None


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to generator settings YAML file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """servergen: generate Express servers from graph descriptions."""
    from servergen.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    ctx.obj = _load_generator_settings(settings)


@app.command()
def generate(
    ctx: typer.Context,
    config_path: Path = typer.Argument(
        ...,
        help="Graph document (JSON, or YAML by .yaml/.yml suffix).",
    ),
    output_path: Path | None = typer.Argument(
        None,
        help="Destination for the generated server (default: server.js).",
    ),
) -> None:
    """Generate a server source file from a graph document."""
    settings: GeneratorSettings = ctx.obj

    try:
        written = generate_server(config_path.expanduser(), output_path, settings=settings)
    except (ServerGenError, OSError) as e:
        typer.echo(f"Error generating server: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Server successfully generated at {written}")


@app.command()
def validate(
    ctx: typer.Context,
    config_path: Path = typer.Argument(
        ...,
        help="Graph document (JSON, or YAML by .yaml/.yml suffix).",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (resolved model).",
    ),
) -> None:
    """Validate a graph document and show the resolved routes without generating."""
    settings: GeneratorSettings = ctx.obj

    try:
        document = load_document(config_path.expanduser())
        validate_document(document)
    except (ServerGenError, OSError) as e:
        typer.echo(f"Error validating graph: {e}", err=True)
        raise typer.Exit(1) from None

    graph = ServerGraph(parse_nodes(document))
    model = resolve(graph, propagation=settings.admin_propagation)

    if output_format == "json":
        payload = {
            "valid": True,
            "nodes": graph.node_count,
            "warnings": [{"code": w.code, "message": w.message} for w in graph.warnings],
            "model": model.to_dict(),
        }
        typer.echo(json.dumps(payload, indent=2, default=str))
        return

    from rich.console import Console
    from rich.table import Table

    console = Console()
    route_word = "route" if len(model.routes) == 1 else "routes"
    typer.echo(f"Graph valid: {graph.node_count} nodes, {len(model.routes)} {route_word}")
    typer.echo(f"Middleware: {', '.join(model.enabled_middleware) or 'none'}")
    for warning in graph.warnings:
        typer.secho(f"Warning: {warning.message}", fg=typer.colors.YELLOW)

    if model.routes:
        table = Table("Method", "Endpoint", "Auth", "Admin")
        for route in model.routes:
            table.add_row(
                route.method.upper(),
                route.endpoint,
                "yes" if route.auth_required else "no",
                "yes" if route.admin_required else "no",
            )
        console.print(table)
