"""Turns user input into a complete registry reference."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from hubpull.models.reference import DEFAULT_TAG, RegistryReference
from hubpull.models.selection import SelectionList, is_index_selection
from hubpull.models.session import Session, SessionMode
from hubpull.registry.base import RegistryError
from hubpull.registry.hub import HubClient
from hubpull.utils.logging import get_logger

logger = get_logger(__name__)


class ResolveMode(str, Enum):
    """How repository input is interpreted."""

    ORGANIZATION_SCOPED = "organization_scoped"
    LIST_SELECTION = "list_selection"
    FREE_ENTRY = "free_entry"


class ResolverPrompts(Protocol):
    """Interaction the resolver needs from its caller."""

    def ask(self, prompt: str) -> str: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def show_tags(self, reference: RegistryReference, tags: SelectionList) -> None: ...


REPOSITORY_PROMPTS = {
    ResolveMode.ORGANIZATION_SCOPED: "Image name (e.g., fsai-os-frontend)",
    ResolveMode.LIST_SELECTION: "Select image to pull",
    ResolveMode.FREE_ENTRY: "Enter image to pull",
}


class ReferenceResolver:
    """Resolves repository and tag input against the session and the hub.

    Repository input is read in one of three modes:

    - ORGANIZATION_SCOPED: a bare name gets the session identity as
      namespace.
    - LIST_SELECTION: a number picks from the displayed list, anything
      else is taken literally.
    - FREE_ENTRY: input is taken literally.

    Purely numeric input is always a list index, in every mode, even
    when the list is empty; a repository named only with digits cannot
    be entered.

    Unless the input already carries a tag, the first page of tags is
    fetched and offered as a numbered list. An empty answer means
    ``latest``.
    """

    def __init__(self, hub: HubClient, session: Session, prompts: ResolverPrompts) -> None:
        self._hub = hub
        self._session = session
        self._prompts = prompts

    def choose_mode(self, choices: SelectionList, namespace_source: bool = False) -> ResolveMode:
        """Pick the input mode for a round of repository selection.

        Args:
            choices: Repositories shown to the user, possibly empty
            namespace_source: Whether the user asked for their own
                namespace rather than a public search

        Returns:
            The mode to resolve input in
        """
        if choices:
            return ResolveMode.LIST_SELECTION
        if (
            namespace_source
            and self._session.authenticated
            and self._session.mode == SessionMode.ORGANIZATION_SCOPED
        ):
            return ResolveMode.ORGANIZATION_SCOPED
        return ResolveMode.FREE_ENTRY

    def prompt_and_resolve(
        self, mode: ResolveMode, choices: SelectionList | None = None
    ) -> RegistryReference | None:
        """Ask for a repository and resolve it completely.

        Returns:
            The resolved reference, or None if the user entered nothing

        Raises:
            SelectionOutOfRangeError: If a number is outside the list
        """
        answer = self._prompts.ask(REPOSITORY_PROMPTS[mode])
        return self.resolve(answer, mode, choices)

    def resolve(
        self, text: str, mode: ResolveMode, choices: SelectionList | None = None
    ) -> RegistryReference | None:
        """Resolve repository input and then its tag.

        Args:
            text: Raw repository input
            mode: Input mode
            choices: The list numbers refer to

        Returns:
            The resolved reference, or None if the input was empty

        Raises:
            SelectionOutOfRangeError: If a number is outside the list
        """
        text = (text or "").strip()
        if not text:
            return None

        reference = self.resolve_repository(text, mode, choices or SelectionList.empty())
        if reference.has_tag:
            return reference
        return self.resolve_tag(reference)

    def resolve_repository(
        self, text: str, mode: ResolveMode, choices: SelectionList
    ) -> RegistryReference:
        """Resolve repository input without touching the tag.

        Raises:
            SelectionOutOfRangeError: If a number is outside the list
        """
        if is_index_selection(text):
            name = choices.resolve(int(text))
            self._prompts.info(f"Selected: {name}")
            return RegistryReference.parse(name)

        reference = RegistryReference.parse(text)
        if mode == ResolveMode.ORGANIZATION_SCOPED and not reference.namespace:
            identity = self._session.identity
            if identity:
                reference = reference.with_namespace(identity)
                self._prompts.info(f"Using full image name: {reference.name}")
        return reference

    def fetch_tags(self, reference: RegistryReference) -> SelectionList:
        """Fetch the first page of tags; failures give an empty list."""
        try:
            return SelectionList.build(self._hub.list_tags(reference))
        except RegistryError as e:
            logger.debug(f"Tag lookup for {reference.name} failed: {e}")
            return SelectionList.empty()

    def resolve_tag(self, reference: RegistryReference) -> RegistryReference:
        """Complete a reference that has no tag.

        Args:
            reference: Reference without a tag

        Returns:
            The reference with a tag
        """
        if reference.has_tag:
            return reference

        self._prompts.info(f"Fetching available tags for '{reference.name}'...")
        tags = self.fetch_tags(reference)

        if not tags:
            self._prompts.warning("Could not fetch tags. Using 'latest' or enter a custom tag.")
            answer = self._prompts.ask("Enter tag (or press Enter for 'latest')").strip()
            return reference.with_tag(answer or DEFAULT_TAG)

        self._prompts.show_tags(reference, tags)
        answer = self._prompts.ask("Select tag").strip()
        if not answer:
            return reference.with_tag(DEFAULT_TAG)
        if is_index_selection(answer):
            index = int(answer)
            if 1 <= index <= len(tags):
                return reference.with_tag(tags.resolve(index))
            self._prompts.warning(f"Invalid selection {index} (valid: 1-{len(tags)}), using 'latest'")
            return reference.with_tag(DEFAULT_TAG)
        return reference.with_tag(answer)
