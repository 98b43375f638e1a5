"""Interactive prompting on the console."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm, Prompt

from hubpull.cli.utils import (
    console as shared_console,
    print_status,
    print_success,
    print_warning,
    tags_table,
)
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList


class Prompter:
    """Console prompts used by the interactive flows.

    Satisfies the resolver's prompt protocol, so the same object drives
    repository and tag selection.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or shared_console

    def ask(self, prompt: str, default: str = "") -> str:
        """Ask for free text; an empty answer returns ``default``."""
        answer = Prompt.ask(prompt, console=self.console, default=default, show_default=False)
        return (answer or "").strip()

    def secret(self, prompt: str) -> str:
        """Ask for text without echoing it."""
        answer = Prompt.ask(prompt, console=self.console, password=True, default="", show_default=False)
        return (answer or "").strip()

    def confirm(self, prompt: str, default: bool = False) -> bool:
        return Confirm.ask(prompt, console=self.console, default=default)

    def choose(self, prompt: str, choices: list[str], default: str | None = None) -> str:
        """Ask until one of ``choices`` is entered."""
        if default is None:
            return Prompt.ask(prompt, console=self.console, choices=choices)
        return Prompt.ask(prompt, console=self.console, choices=choices, default=default)

    def info(self, message: str) -> None:
        print_status(message)

    def success(self, message: str) -> None:
        print_success(message)

    def warning(self, message: str) -> None:
        print_warning(message)

    def show_tags(self, reference: RegistryReference, tags: SelectionList) -> None:
        self.console.print()
        self.console.print(tags_table(reference, tags))
        self.console.print()
        self.console.print("[yellow]Enter a number, type a tag name, or press Enter for 'latest'[/yellow]")
