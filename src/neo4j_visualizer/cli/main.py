#!/usr/bin/env python3
"""
neo4j-viz - prepare chart and graph models from Neo4j query results
"""

from __future__ import annotations

import json
import logging

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from neo4j_visualizer.engine import prepare_chart, prepare_graph, prepare_table
from neo4j_visualizer.errors import ConfigurationError
from neo4j_visualizer.settings import settings

console = Console()


def _configure_logging() -> None:
    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load(fp) -> object:
    try:
        return json.load(fp)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="FILE") from e


@click.group()
def cli():
    """Neo4j Visualizer - chart and graph data preparation"""
    _configure_logging()


@cli.command()
def version():
    """Print the package version"""
    from neo4j_visualizer import __version__

    click.echo(__version__)


@cli.command()
@click.argument("file", type=click.File("r"))
@click.option("--title", default=None, help="Chart title")
@click.option("--json", "as_json", is_flag=True, help="Print the render model as JSON")
def chart(file, title, as_json):
    """Classify query results in FILE into a chart"""
    model = prepare_chart(_load(file), {"title": title})

    if as_json:
        console.print_json(json.dumps(model.to_dict()))
        return

    if model.is_empty:
        console.print("[yellow]No chartable data found[/yellow]")
        return

    console.print(Panel.fit(f"[bold cyan]Chart type: {model.chart_type.value}[/bold cyan]"))
    table = Table(title=title or "Data points")
    table.add_column("Label", style="green")
    table.add_column("Value", style="cyan", justify="right")
    for p in model.points:
        table.add_row(p.label, f"{p.value:g}")
    console.print(table)


@cli.command("table")
@click.argument("file", type=click.File("r"))
@click.option("--title", default=None, help="Table title")
@click.option("--json", "as_json", is_flag=True, help="Print the table model as JSON")
def table_cmd(file, title, as_json):
    """Show the records in FILE as a table"""
    model = prepare_table(_load(file), {"title": title})

    if as_json:
        console.print_json(json.dumps(model.to_dict()))
        return

    if model.is_empty:
        console.print("[yellow]No records found[/yellow]")
        return

    table = Table(title=title or "Neo4j Query Results")
    for h in model.headers:
        table.add_column(f"{h} ({model.column_types[h].value})", style="white")
    for row in model.rows:
        table.add_row(*row)
    console.print(table)


@cli.command()
@click.argument("file", type=click.File("r"))
@click.option("--group-by", default=None, help="Node property to group by")
@click.option("--no-hierarchy", is_flag=True, help="Disable grouping even with --group-by")
@click.option("--layout", "layout_name", type=click.Choice(["force", "grid"]), default="force")
@click.option("--width", default=None, type=int, help="Canvas width in pixels")
@click.option("--height", default=None, type=int, help="Canvas height in pixels")
@click.option("--iterations", default=None, type=int, help="Force layout iterations")
@click.option("--seed", default=None, type=int, help="Seed for the initial placement")
@click.option("--json", "as_json", is_flag=True, help="Print the render model as JSON")
def graph(file, group_by, no_hierarchy, layout_name, width, height, iterations, seed, as_json):
    """Group and lay out the nodes/relationships in FILE"""
    data = _load(file)
    if not isinstance(data, dict):
        raise click.BadParameter("expected an object with 'nodes' and 'relationships'", param_hint="FILE")

    options = {
        "groupByProperty": group_by,
        "showHierarchy": not no_hierarchy,
        "layout": layout_name,
        "seed": seed,
    }
    for key, val in (("width", width), ("height", height), ("iterations", iterations)):
        if val is not None:
            options[key] = val

    try:
        model = prepare_graph(data.get("nodes") or [], data.get("relationships") or [], options)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        console.print_json(json.dumps(model.to_dict()))
        return

    console.print(
        Panel.fit(
            f"[bold cyan]{len(model.nodes)} nodes, {len(model.groups)} groups, {len(model.edges)} edges[/bold cyan]"
        )
    )
    table = Table(title="Positions")
    table.add_column("Id", style="green")
    table.add_column("Label", style="white")
    table.add_column("X", style="cyan", justify="right")
    table.add_column("Y", style="cyan", justify="right")
    table.add_column("Parent", style="magenta")
    for n in model.nodes:
        table.add_row(n.id, n.label, f"{n.x:.1f}", f"{n.y:.1f}", n.parent_id or "")
    console.print(table)


def app() -> None:
    cli()


if __name__ == "__main__":
    app()
