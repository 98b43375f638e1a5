"""Main CLI entry point for hubpull."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from hubpull.cli import images, login, pull, search

app = typer.Typer(
    name="hubpull",
    help="Interactive assistant for finding, authenticating and pulling Docker Hub images.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="pull")(pull.pull_cmd)
app.command(name="login")(login.login_cmd)
app.command(name="images")(images.images_cmd)
app.command(name="search")(search.search_cmd)
app.command(name="tags")(search.tags_cmd)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    debug: bool = typer.Option(
        False, "--debug", help="Echo every registry and engine call (overrides the DEBUG key)"
    ),
    credentials: Optional[Path] = typer.Option(
        None,
        "--credentials",
        "-c",
        envvar="HUBPULL_CREDENTIALS",
        help="Credential file (default: .docker-credentials in the working directory)",
    ),
) -> None:
    """
    hubpull: pull Docker Hub images without memorizing references.

    - [bold]pull[/bold]: Log in, pick a repository and tag, and pull it
    - [bold]login[/bold]: Log in and optionally save credentials
    - [bold]images[/bold]: Show and remove local images
    - [bold]search[/bold]: Search public repositories
    - [bold]tags[/bold]: List tags of a repository
    """
    from hubpull.cli.utils import CliState, fail
    from hubpull.core.credentials import CredentialStore
    from hubpull.utils.config import get_config
    from hubpull.utils.errors import ConfigurationError
    from hubpull.utils.logging import configure_logging
    from hubpull.utils.tracing import CallTracer, set_tracer

    if verbose or debug:
        configure_logging(level="DEBUG", structured=debug)
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")

    try:
        config = get_config()
    except ConfigurationError as e:
        raise fail(str(e))

    store = CredentialStore(
        credentials or config.credentials.resolve_path(),
        placeholder_token=config.credentials.placeholder_token,
    )
    # Read once per run; later edits to the file do not change it.
    set_tracer(CallTracer(enabled=debug or store.debug_enabled()))
    ctx.obj = CliState(config=config, store=store)


@app.command()
def version() -> None:
    """Show the hubpull version."""
    from hubpull import __version__

    console.print(f"hubpull version {__version__}")


if __name__ == "__main__":
    app()
