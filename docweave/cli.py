"""CLI entry point for docweave."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from docweave.config import DocweaveConfig, load_config
from docweave.config.loader import DEFAULT_CONFIG_TEMPLATE, PROJECT_CONFIG
from docweave.config.logging import setup_logging
from docweave.errors import BehaviourError, ConfigurationError, TemplateError
from docweave.templates import TemplateResolver
from docweave.transformer import TransformReport, Transformer

app = typer.Typer(
    name="docweave",
    help="Transform a code structure file into documentation using templates.",
)

config_app = typer.Typer(help="Manage docweave configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: DocweaveConfig | None = None

# Exit code for runs where some transformations failed
EXIT_PARTIAL = 2


def _get_config() -> DocweaveConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to docweave.yaml")
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="debug | info | warn | error")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    setup_logging(log_level or _config.log_level, _config.log_format)


def _display_report(report: TransformReport, target: Path) -> None:
    table = Table(title="Transformation")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Target", str(target))
    table.add_row("Transformations", str(report.transformations))
    table.add_row("Artifacts", str(len(report.artifacts)))
    table.add_row("Failures", str(len(report.failures)))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for failure in report.failures:
        rprint(f"  [red]error:[/red] {failure.writer} {failure.query!r}: {failure.error}")


@app.command()
def transform(
    source: Annotated[
        str | None, typer.Option("--source", "-s", help="Structure file to transform")
    ] = None,
    target: Annotated[
        str | None, typer.Option("--target", "-t", help="Existing, writable output directory")
    ] = None,
    template: Annotated[
        list[str] | None,
        typer.Option("--template", help="Theme name or template directory (repeatable)"),
    ] = None,
    themes_path: Annotated[
        str | None, typer.Option("--themes-path", help="Directory holding the themes")
    ] = None,
    parse_private: Annotated[
        bool | None,
        typer.Option("--parse-private/--hide-private", help="Keep private and @internal elements"),
    ] = None,
) -> None:
    """Run the behaviours and every template transformation."""
    cfg = _get_config()
    tc = cfg.transformer
    overrides = {
        "source": source if source is not None else tc.source,
        "target": target if target is not None else tc.target,
        "templates": template or tc.templates,
        "themes_path": themes_path if themes_path is not None else tc.themes_path,
        "parse_private": parse_private if parse_private is not None else tc.parse_private,
    }
    run_cfg = cfg.model_copy(update={"transformer": tc.model_copy(update=overrides)})

    rprint(
        f"[bold]Transforming[/bold] {run_cfg.transformer.source or '(no source)'} "
        f"with {', '.join(run_cfg.transformer.templates)}..."
    )
    try:
        transformer = Transformer.from_config(run_cfg)
        report = transformer.execute()
    except (ConfigurationError, TemplateError, BehaviourError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _display_report(report, transformer.target)
    if report.partial:
        raise typer.Exit(EXIT_PARTIAL)


@app.command()
def templates(
    themes_path: Annotated[
        str | None, typer.Option("--themes-path", help="Directory holding the themes")
    ] = None,
) -> None:
    """List available themes and cached templates."""
    cfg = _get_config()
    resolver = TemplateResolver(themes_path or cfg.transformer.themes_path)
    names = resolver.available()
    if not names:
        rprint(f"[yellow]No templates found in {resolver.themes_path}.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Templates ({len(names)})")
    table.add_column("Name", style="cyan")
    table.add_column("Transformations", justify="right")
    table.add_column("Description", style="green")
    for name in names:
        try:
            template = resolver.resolve(name)
        except TemplateError as e:
            table.add_row(name, "-", f"[red]{e}[/red]")
            continue
        table.add_row(name, str(len(template)), template.definition.description or "-")
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default docweave.yaml in current directory."""
    target = PROJECT_CONFIG
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
