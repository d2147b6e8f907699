import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import get_settings
from .sources.loader import SourceLoader
from .viewmodels.dispatcher import Dispatcher
from .viewmodels.formats import ModelFormat, ViewKind, compatible_kinds
from .viewmodels.tree import TreeParentPolicy

console = Console()


def setup_logging(level: str) -> None:
    """Route log records through rich"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True
    )


def print_table_model(json_model) -> None:
    """Show a vm-tabular-json model as a rich table"""
    table_model = json_model.values
    columns = json_model.header or (list(table_model.rows[0].keys()) if table_model.rows else [])

    table = Table(title=f"{len(table_model.rows)} rows")
    for column in columns:
        table.add_column(column, style="cyan", overflow="fold")

    for row in table_model.rows:
        table.add_row(*["" if row.get(c) is None else str(row.get(c)) for c in columns])

    console.print(table)


@click.group()
@click.option('--log-level', default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help='Override the configured log level')
def cli(log_level):
    """vizlab - turn RDF into graph, table and tree view models"""
    setup_logging((log_level or get_settings().log_level).upper())


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@click.option('--view', 'view_kind', default='graph',
              type=click.Choice([k.value for k in ViewKind]), help='View model to produce')
@click.option('--rdf-format', default=None, help='rdflib parser (default: from suffix)')
@click.option('--tree-policy', default=None,
              type=click.Choice([p.value for p in TreeParentPolicy]),
              help='Parent choice for nodes with several incoming links')
@click.option('--output', type=click.Path(dir_okay=False), default=None,
              help='Write the JSON model to this file')
def render(file_path: str, view_kind: str, rdf_format: str, tree_policy: str, output: str):
    """Load a source file and render it as a view model"""
    try:
        source = SourceLoader().load_from_file(file_path, rdf_format=rdf_format)
    except Exception as e:
        console.print(f"✗ Failed to load {file_path}: {e}", style="red")
        sys.exit(1)

    dispatcher = Dispatcher()
    options = {"parent_policy": tree_policy} if view_kind == ViewKind.TREE.value and tree_policy else {}
    view_model = dispatcher.create_view_model(view_kind, **options)

    result = dispatcher.render(source, view_model)
    if not result.ok:
        console.print(f"✗ {result.error}", style="red")
        offered = dispatcher.compatible_view_kinds(source)
        if offered:
            console.print(f"  Compatible views: {', '.join(k.value for k in offered)}", style="yellow")
        sys.exit(1)

    json_model = result.model
    if view_kind == ViewKind.TABLE.value:
        print_table_model(json_model)
    else:
        console.print_json(data=json_model.to_dict()["values"])

    if output:
        Path(output).write_text(json.dumps(json_model.to_dict(), indent=2), encoding='utf-8')
        console.print(f"✓ Wrote {json_model.format.value} model to {output}", style="green")


@cli.command()
def formats():
    """Show which views can consume which model formats"""
    table = Table(title="Model formats")
    table.add_column("Format", style="cyan")
    for kind in ViewKind:
        table.add_column(kind.value, justify="center")

    for model_format in ModelFormat:
        kinds = compatible_kinds(model_format)
        table.add_row(model_format.value, *["✓" if kind in kinds else "" for kind in ViewKind])

    console.print(table)


@cli.command()
def info():
    """Show active configuration"""
    settings = get_settings()

    console.print("\n📊 vizlab configuration\n", style="bold")
    console.print(f"  Log level: {settings.log_level}")

    console.print("\n🧩 View models:", style="bold cyan")
    vm = settings.view_models
    console.print(f"  Tree parent policy: {vm.tree_parent_policy}")
    console.print(f"  Graph link labels: {vm.graph_include_predicates}")
    console.print(f"  Literal nodes: {vm.graph_literals_as_nodes}")
    console.print(f"  Table fill missing: {vm.table_fill_missing}")
    console.print(f"  Table subject column: {vm.table_subject_column or '(none)'}")

    console.print("\n📥 Loader:", style="bold cyan")
    console.print(f"  Default RDF format: {settings.loader.default_rdf_format}")
    console.print()


if __name__ == '__main__':
    cli()
