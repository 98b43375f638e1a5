"""Public search and tag listing commands."""

from __future__ import annotations

from typing import Optional

import typer

from hubpull.cli.prompts import Prompter
from hubpull.cli.utils import (
    console,
    fail,
    get_state,
    print_status,
    print_warning,
    search_table,
    tags_table,
)
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList
from hubpull.registry.base import RegistryError
from hubpull.registry.hub import HubClient
from hubpull.utils.config import RegistryConfig
from hubpull.utils.errors import InvalidReferenceError


def search_public(hub: HubClient, prompter: Prompter, config: RegistryConfig) -> SelectionList:
    """Ask for a search term and show the numbered results.

    Returns:
        The result names; empty if nothing was found or the search failed
    """
    print_status("Searching public Docker Hub images...")
    term = prompter.ask(
        f"Enter a search term (or press Enter for popular images like '{config.default_search_term}')"
    )
    term = term or config.default_search_term

    print_status(f"Searching for '{term}' images...")
    try:
        results = hub.search_repositories(term)
    except RegistryError as e:
        print_warning(f"Search failed: {e}")
        return SelectionList.empty()

    if not results:
        print_warning(f"No images found for '{term}'.")
        return SelectionList.empty()

    console.print(search_table(term, results))
    console.print()
    return SelectionList.build([r.name for r in results])


def search_cmd(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Search term"),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        max=100,
        help="Maximum number of results",
    ),
) -> None:
    """
    Search public Docker Hub repositories.

    Example:
        hubpull search nginx --limit 10
    """
    state = get_state(ctx)
    hub = HubClient(state.config.registry)
    try:
        results = hub.search_repositories(term, limit=limit)
    except RegistryError as e:
        raise fail(f"Search failed: {e}")

    if not results:
        print_warning(f"No images found for '{term}'.")
        return
    console.print(search_table(term, results))


def tags_cmd(
    ctx: typer.Context,
    image: str = typer.Argument(..., help="Repository, e.g. nginx or bitnami/redis"),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        min=1,
        max=100,
        help="Number of tags to fetch",
    ),
) -> None:
    """
    List available tags for a repository.

    Example:
        hubpull tags nginx
    """
    state = get_state(ctx)
    hub = HubClient(state.config.registry)
    try:
        reference = RegistryReference.parse(image)
    except InvalidReferenceError as e:
        raise fail(str(e))
    try:
        tags = hub.list_tags(reference, page_size=page_size)
    except RegistryError as e:
        raise fail(f"Could not fetch tags for {reference.name}: {e}")

    if not tags:
        print_warning(f"No tags found for {reference.name}.")
        return
    console.print(tags_table(reference, SelectionList.build(tags)))
