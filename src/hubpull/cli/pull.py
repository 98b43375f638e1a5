"""Interactive pull flow."""

from __future__ import annotations

from typing import Optional

import typer
from rich.panel import Panel

from hubpull.cli.images import manage_local_images, show_local_images
from hubpull.cli.login import run_login
from hubpull.cli.prompts import Prompter
from hubpull.cli.search import search_public
from hubpull.cli.utils import (
    console,
    fail,
    get_state,
    print_status,
    print_success,
    print_warning,
    selection_table,
)
from hubpull.core.auth import AuthStrategist
from hubpull.core.resolver import ReferenceResolver, ResolveMode
from hubpull.models.selection import SelectionList
from hubpull.models.session import Session
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient
from hubpull.utils.config import HubPullConfig
from hubpull.utils.errors import EngineError, InvalidReferenceError, SelectionOutOfRangeError

MODE_HINTS = {
    ResolveMode.ORGANIZATION_SCOPED: "Enter the repository name (org prefix will be added automatically)",
    ResolveMode.LIST_SELECTION: (
        "Enter a number from the list above, or type a custom image name (e.g., ubuntu:22.04)"
    ),
    ResolveMode.FREE_ENTRY: "Enter an image name to pull (e.g., nginx, ubuntu:22.04)",
}


def list_namespace(session: Session, strategist: AuthStrategist) -> SelectionList:
    """Enumerate the session's namespace, explaining when that is impossible."""
    identity = session.identity or ""
    console.print()
    print_status(f"Listing repositories for '{identity}'...")
    names = strategist.list_repositories(session.credential) if session.credential else []
    if names:
        choices = SelectionList.build([f"{identity}/{name}" for name in names])
        console.print(selection_table(f"Repositories in {identity}", choices, header="REPOSITORY"))
        console.print()
        return choices

    console.print(
        Panel(
            "[yellow]Docker Hub's API did not list repositories for this token.\n"
            "You can still pull images: just enter the repository name.[/yellow]",
            expand=False,
        )
    )
    if session.credential and session.credential.is_organization:
        console.print(
            "[green]Example:\n"
            "  Image name:  fsai-os-frontend\n"
            "  Tag:         v1.14.1\n"
            f"  Result:      {identity}/fsai-os-frontend:v1.14.1[/green]"
        )
    console.print(f"[blue]To see your repositories, visit: https://hub.docker.com/u/{identity}[/blue]")
    console.print()
    return SelectionList.empty()


def choose_source(
    session: Session,
    strategist: AuthStrategist,
    hub: HubClient,
    prompter: Prompter,
    config: HubPullConfig,
) -> tuple[SelectionList, bool]:
    """Ask where images come from and build the list to choose from.

    Returns:
        The choices and whether they came from the user's own namespace
    """
    console.print()
    if session.authenticated and session.identity:
        console.print(
            Panel(
                "[blue]Choose image source:\n"
                f"  \\[1] Your images ({session.identity})\n"
                "  \\[2] Search public Docker Hub images[/blue]",
                expand=False,
            )
        )
        if prompter.choose("Select source", ["1", "2"]) == "1":
            return list_namespace(session, strategist), True

    return search_public(hub, prompter, config.registry), False


def pull_cmd(
    ctx: typer.Context,
    manage_images: bool = typer.Option(
        True,
        "--manage-images/--no-manage-images",
        help="Offer to remove existing local images first",
    ),
    scan: Optional[bool] = typer.Option(
        None,
        "--scan/--no-scan",
        help="Scan the pulled image for vulnerabilities (asks when omitted)",
    ),
) -> None:
    """
    Find, authenticate for, and pull a Docker Hub image.

    Walks through optional clean-up of local images, optional login,
    choosing between your own repositories and a public search, picking
    a tag, and pulling the result.

    Example:
        hubpull pull
        hubpull pull --no-manage-images --no-scan
    """
    state = get_state(ctx)
    prompter = Prompter()
    engine = DockerEngine()
    hub = HubClient(state.config.registry)

    try:
        engine.ping()
    except EngineError as e:
        raise fail(str(e))
    print_success("Docker daemon is running.")

    if manage_images:
        try:
            manage_local_images(engine, prompter)
        except EngineError as e:
            print_warning(str(e))

    strategist = AuthStrategist(engine, hub)
    try:
        session = run_login(prompter, state.store, strategist)
    except EngineError as e:
        raise fail(str(e))
    if not session.authenticated:
        console.print()
        print_status("Running without authentication - only public images are available.")

    choices, namespace_source = choose_source(session, strategist, hub, prompter, state.config)
    resolver = ReferenceResolver(hub, session, prompter)
    mode = resolver.choose_mode(choices, namespace_source=namespace_source)

    console.print(f"[yellow]{MODE_HINTS[mode]}[/yellow]")
    console.print("[yellow]Press Enter to skip pulling.[/yellow]")
    try:
        reference = resolver.prompt_and_resolve(mode, choices)
    except (SelectionOutOfRangeError, InvalidReferenceError) as e:
        raise fail(str(e))

    if reference is None:
        print_status("No image selected for pulling. Exiting.")
        return

    rendered = reference.render()
    console.print()
    print_status(f"Pulling image: {rendered}")
    try:
        with console.status(f"Pulling {rendered}..."):
            engine.pull(reference, session.credential)
    except EngineError as e:
        raise fail(str(e))
    print_success(f"Successfully pulled {rendered}!")

    if scan is None:
        scan = prompter.confirm("Scan the image for vulnerabilities?", default=False)
    if scan:
        try:
            returncode = engine.scan(rendered, state.config.scan.command)
        except EngineError as e:
            print_warning(str(e))
        else:
            if returncode == 0:
                print_success("Scan complete.")
            else:
                print_warning(f"Scanner exited with code {returncode}.")

    console.print()
    print_status("Your local Docker images:")
    try:
        show_local_images(engine)
    except EngineError as e:
        print_warning(str(e))

    console.print()
    print_success("Done!")
