"""Shared utilities for CLI commands."""

from __future__ import annotations

from typing import NamedTuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hubpull.core.credentials import CredentialStore
from hubpull.models.image import LocalImage, SearchResult
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList
from hubpull.utils.config import HubPullConfig

# Shared console instance
console = Console()

DESCRIPTION_WIDTH = 50


class CliState(NamedTuple):
    """Objects the root callback builds for every command."""

    config: HubPullConfig
    store: CredentialStore


def get_state(ctx: typer.Context) -> CliState:
    """Get the state set up by the root callback."""
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        raise RuntimeError("hubpull CLI state is not initialized")
    return state


def print_status(message: str) -> None:
    console.print(f"[blue]\\[INFO][/blue] {escape(message)}")


def print_success(message: str) -> None:
    console.print(f"[green]\\[SUCCESS][/green] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]\\[WARNING][/yellow] {escape(message)}")


def print_error(message: str) -> None:
    console.print(f"[red]\\[ERROR][/red] {escape(message)}")


def fail(message: str, code: int = 1) -> typer.Exit:
    """Print an error and build the exit to raise.

    Example:
        raise fail("Docker daemon is not running")
    """
    print_error(message)
    return typer.Exit(code)


def selection_table(title: str, choices: SelectionList, header: str = "NAME") -> Table:
    """Build a numbered table for a selection list."""
    table = Table(title=title, title_justify="left", show_lines=False, pad_edge=False)
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column(header)
    for index, label in choices.numbered():
        table.add_row(f"[{index}]", escape(label))
    return table


def search_table(term: str, results: list[SearchResult]) -> Table:
    """Build a numbered table of search results."""
    table = Table(
        title=f"Results for '{escape(term)}'", title_justify="left", show_lines=False, pad_edge=False
    )
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("NAME", no_wrap=True)
    table.add_column("STARS", justify="right")
    table.add_column("DESCRIPTION", style="dim")
    for index, result in enumerate(results, 1):
        name = escape(result.name)
        if result.is_official:
            name += " [green](official)[/green]"
        table.add_row(
            f"[{index}]",
            name,
            str(result.star_count),
            escape(result.description[:DESCRIPTION_WIDTH]),
        )
    return table


def tags_table(reference: RegistryReference, tags: SelectionList) -> Table:
    """Build a numbered table of tags."""
    return selection_table(f"Available tags for {escape(reference.name)}", tags, header="TAG")


def images_table(images: list[LocalImage]) -> Table:
    """Build a numbered table of local images."""
    table = Table(title="Your current Docker images", title_justify="left", pad_edge=False)
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("IMAGE")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("SIZE", justify="right")
    for index, image in enumerate(images, 1):
        table.add_row(f"[{index}]", escape(image.reference), image.short_id, image.size_display)
    return table
