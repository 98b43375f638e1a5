"""Local image clean-up flow and CLI command."""

from __future__ import annotations

import typer

from hubpull.cli.prompts import Prompter
from hubpull.cli.utils import (
    console,
    fail,
    images_table,
    print_status,
    print_success,
    print_warning,
)
from hubpull.core.inventory import ImageInventory, parse_removal_selection
from hubpull.registry.engine import DockerEngine
from hubpull.utils.errors import EngineError


def show_local_images(engine: DockerEngine) -> None:
    """Print the numbered local image table."""
    images = ImageInventory(engine).refresh()
    if not images:
        print_status("No local Docker images found.")
        return
    console.print(images_table(images))


def manage_local_images(engine: DockerEngine, prompter: Prompter) -> int:
    """Show local images and remove the ones the user picks.

    Returns:
        Number of images removed
    """
    console.print()
    print_status("Checking for existing Docker images on your system...")
    inventory = ImageInventory(engine)
    images = inventory.refresh()
    if not images:
        print_status("No local Docker images found.")
        return 0

    console.print(images_table(images))
    console.print()
    console.print("[yellow]To remove images, enter the numbers separated by commas (e.g., 1,3,5)[/yellow]")
    console.print("[yellow]Press Enter to keep all images.[/yellow]")
    answer = prompter.ask("Enter image numbers to remove")
    if not answer:
        print_status("Keeping all existing images.")
        return 0

    selection = parse_removal_selection(answer, len(images))
    for reason in selection.skipped:
        print_warning(reason)

    report = inventory.remove(selection.indices)
    for image in report.removed:
        console.print(f"Removing {image.reference}... [green]Done[/green]")
    for image in report.failed:
        console.print(f"Removing {image.reference}... [red]Failed[/red]")
        print_warning(f"Could not remove {image.reference}. It may be in use.")

    console.print()
    if not report.removed:
        print_status("No images were removed.")
        return 0

    print_success(f"Removed {len(report.removed)} image(s).")
    print_status("Cleaning up unused data...")
    try:
        inventory.cleanup()
    except EngineError as e:
        print_warning(str(e))
    else:
        print_success("Cleanup complete.")
    return len(report.removed)


def images_cmd(
    list_only: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="Only list local images, do not offer removal",
    ),
) -> None:
    """
    Show local Docker images and optionally remove some.

    Example:
        hubpull images
        hubpull images --list
    """
    engine = DockerEngine()
    try:
        engine.ping()
        if list_only:
            show_local_images(engine)
        else:
            manage_local_images(engine, Prompter())
    except EngineError as e:
        raise fail(str(e))
