"""Target checking commands for the svrender CLI."""

import typer
from rich.table import Table

from svrender.cli.utils import console, load_datasource
from svrender.rendering.options import LINK_TARGET_TYPES
from svrender.rendering.targets import TargetResolver


def check(
    site: str = typer.Argument(..., help="Site description (JSON)"),
):
    """Show whether each node of a site is a renderable and valid link target."""
    ds = load_datasource(site)
    resolver = TargetResolver(ds, LINK_TARGET_TYPES, ds.site_hosts)

    nodes = ds.targets()
    if not nodes:
        console.print("No nodes found")
        return

    table = Table("ID", "Type", "Renderable", "Valid")
    invalid = 0
    for target in nodes:
        verdict = resolver.classify(target)
        if not verdict.valid:
            invalid += 1
        table.add_row(
            target.identifier,
            target.node_type,
            "yes" if verdict.renderable else "no",
            "yes" if verdict.valid else "no",
        )
    console.print(table)
    console.print(f"{len(nodes)} nodes, {invalid} not valid")
