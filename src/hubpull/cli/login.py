"""Registry login flow and CLI command."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.panel import Panel

from hubpull.cli.prompts import Prompter
from hubpull.cli.utils import (
    console,
    fail,
    get_state,
    print_error,
    print_status,
    print_success,
    print_warning,
)
from hubpull.core.auth import AuthStrategist
from hubpull.core.credentials import CredentialStore
from hubpull.models.credential import Credential, IdentityKind
from hubpull.models.session import Session
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient
from hubpull.utils.errors import AuthenticationError, EngineError

PUBLIC_IMAGES_NOTE = (
    "[green]PUBLIC images (nginx, ubuntu, python, etc.) don't require login!\n"
    "Only private repositories require authentication.[/green]"
)

TOKEN_TYPE_MENU = (
    "[blue]Choose your token type:\n\n"
    "  \\[1] Organization Access Token (OAT)\n"
    "      - Token starts with: dckr_oat_\n"
    "      - Use your ORGANIZATION NAME as the username\n\n"
    "  \\[2] Personal Access Token (PAT)\n"
    "      - Token starts with: dckr_pat_\n"
    "      - Use your PERSONAL USERNAME (not email)[/blue]"
)


def prompt_credential(prompter: Prompter) -> Credential | None:
    """Ask for token type, identity and token.

    Returns:
        The entered credential, or None if the user skipped a field
    """
    console.print()
    console.print(Panel(TOKEN_TYPE_MENU, expand=False))
    choice = prompter.choose("Select token type", ["1", "2"])

    if choice == "1":
        kind = IdentityKind.ORGANIZATION
        console.print("[yellow]Using Organization Access Token (OAT)[/yellow]")
        identity = prompter.ask("Enter your Docker Hub organization name")
    else:
        kind = IdentityKind.PERSONAL
        console.print("[yellow]Using Personal Access Token (PAT)[/yellow]")
        console.print(
            "[yellow]To find your username: Go to hub.docker.com > Profile icon > "
            "Username at top[/yellow]"
        )
        identity = prompter.ask("Enter your Docker Hub username (NOT your email)")

    if not identity:
        print_warning("No username/org name provided. Skipping login.")
        return None

    token = prompter.secret("Enter your Docker Hub access token")
    if not token:
        print_warning("No token provided. Skipping login.")
        return None

    try:
        return Credential(identity=identity, token=token, identity_kind=kind)
    except ValidationError:
        print_warning("That token is not usable. Skipping login.")
        return None


def login_with_saved(
    prompter: Prompter, store: CredentialStore, strategist: AuthStrategist
) -> Session | None:
    """Try the credential file.

    Returns:
        The session if saved credentials logged in, otherwise None
    """
    if not store.exists():
        return None

    console.print()
    print_status(f"Found credentials file: {store.path}")
    if not prompter.confirm("Use saved credentials?", default=True):
        return None

    credential = store.load()
    if credential is None:
        print_warning("Config file exists but credentials not set.")
        print_status(f"Edit {store.path} to save your credentials.")
        return None

    label = "organization" if credential.is_organization else "user"
    print_status(f"Using credentials for {label}: {credential.identity}")
    try:
        session = strategist.login(credential)
    except AuthenticationError as e:
        print_error(f"Failed to login with saved credentials: {e}")
        print_status("Falling back to manual entry...")
        return None

    print_success("Successfully logged in to Docker Hub!")
    return session


def run_login(
    prompter: Prompter,
    store: CredentialStore,
    strategist: AuthStrategist,
    ask_first: bool = True,
) -> Session:
    """Interactive login: saved credentials first, then manual entry.

    A failed login is never retried with the same credential; the user
    is offered manual entry once, and a failure there leaves the
    session unauthenticated.

    Args:
        prompter: Console prompts
        store: Credential file
        strategist: Performs the login
        ask_first: Ask whether to log in at all

    Returns:
        The session, authenticated or not
    """
    console.print()
    print_status("Docker Hub Authentication")
    if ask_first:
        console.print(Panel(PUBLIC_IMAGES_NOTE, expand=False))
        if not prompter.confirm("Do you want to login to Docker Hub?", default=False):
            print_status("Skipping Docker Hub login. You can still pull public images.")
            return strategist.session

    session = login_with_saved(prompter, store, strategist)
    if session is not None:
        return session

    credential = prompt_credential(prompter)
    if credential is None:
        return strategist.session

    try:
        session = strategist.login(credential)
    except AuthenticationError as e:
        print_error(f"Failed to login to Docker Hub: {e}")
        print_status("Continuing without authentication. You can still pull public images.")
        return strategist.session

    print_success("Successfully logged in to Docker Hub!")
    console.print()
    if prompter.confirm("Save credentials to config file for future use?", default=False):
        try:
            path = store.save(credential)
        except OSError as e:
            print_error(f"Could not save credentials to {store.path}: {e}")
        else:
            print_success(f"Credentials saved to {path}")
    return session


def login_cmd(ctx: typer.Context) -> None:
    """
    Log in to Docker Hub.

    Uses the saved credential file when present, otherwise asks for an
    access token and offers to save it.

    Example:
        hubpull login
    """
    state = get_state(ctx)
    engine = DockerEngine()
    try:
        engine.ping()
    except EngineError as e:
        raise fail(str(e))

    strategist = AuthStrategist(engine, HubClient(state.config.registry))
    try:
        session = run_login(Prompter(), state.store, strategist, ask_first=False)
    except EngineError as e:
        raise fail(str(e))
    if not session.authenticated:
        raise fail("Not logged in.")

    kind = session.identity_kind.value if session.identity_kind else "unknown"
    console.print(f"Logged in as [bold]{session.identity}[/bold] ({kind} token)")
