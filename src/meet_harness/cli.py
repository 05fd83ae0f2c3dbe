"""CLI entry point for Meet Harness."""

import json
from collections import defaultdict
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .capture.layout import ArtifactLayout, initialize_layout
from .config import load_config
from .models import ArtifactKind, Role, parse_artifact_name

console = Console()


@click.group()
@click.version_option()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """Meet Harness - failure diagnostics for Jitsi Meet browser tests."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(Path(config_path) if config_path else None)


@main.command()
@click.option("--reports-dir", "-r", type=click.Path(file_okay=False), help="Reports directory")
@click.pass_context
def init(ctx: click.Context, reports_dir: str | None) -> None:
    """Create the screenshot, HTML source and log directories."""
    config = ctx.obj["config"]
    layout = initialize_layout(reports_dir, config)

    for directory in layout.directories:
        mark = "[green]✓[/]" if directory.is_dir() else "[red]✗[/]"
        console.print(f"  {mark} {directory}")


@main.command()
@click.option("--reports-dir", "-r", type=click.Path(file_okay=False), help="Reports directory")
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json"]), default="table")
@click.pass_context
def artifacts(ctx: click.Context, reports_dir: str | None, output_format: str) -> None:
    """List artifacts captured for failed tests."""
    config = ctx.obj["config"]
    layout = ArtifactLayout.for_root(reports_dir or config.reports_dir, config.layout)
    found = collect_artifacts(layout)

    if output_format == "json":
        data = {
            prefix: [
                {"kind": kind.value, "role": role.value, "path": str(path)}
                for kind, role, path in entries
            ]
            for prefix, entries in found.items()
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not found:
        console.print(f"[green]No failure artifacts in {layout.root}[/]")
        return

    table = Table(title=f"Failure artifacts in {layout.root}")
    table.add_column("Test", style="cyan")
    for role in Role:
        table.add_column(role.value, style="magenta")

    for prefix, entries in found.items():
        by_role = defaultdict(list)
        for kind, role, _ in entries:
            by_role[role].append(kind.extension)
        table.add_row(prefix, *(", ".join(by_role[role]) or "-" for role in Role))

    console.print(table)
    console.print(f"\n[bold]{len(found)}[/] failed tests with artifacts")


def collect_artifacts(layout: ArtifactLayout) -> dict[str, list[tuple[ArtifactKind, Role, Path]]]:
    """Group artifact files in the layout by test prefix."""
    found: dict[str, list[tuple[ArtifactKind, Role, Path]]] = defaultdict(list)
    for directory in layout.directories:
        if not directory.is_dir():
            continue
        for path in sorted(directory.iterdir()):
            parsed = parse_artifact_name(path.name)
            if parsed is None or layout.directory_for(parsed[1]) != directory:
                continue
            prefix, kind, role = parsed
            found[prefix].append((kind, role, path))
    return dict(sorted(found.items()))


if __name__ == "__main__":
    main()
