"""CLI commands for item names."""

from __future__ import annotations

import click

from eoms.domain.model.catalog import suggest_item_names


@click.command("suggest")
@click.argument("text")
def item_suggest(text: str) -> None:
    """Suggest catalog item names containing TEXT."""
    names = suggest_item_names(text)
    if not names:
        click.echo("No suggestions.")
        return
    for name in names:
        click.echo(name)
