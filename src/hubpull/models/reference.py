"""Registry reference model."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from hubpull.utils.errors import InvalidReferenceError

DEFAULT_TAG = "latest"
DEFAULT_NAMESPACE = "library"


class RegistryReference(BaseModel):
    """A repository on the hub, optionally namespaced and tagged.

    Rendering follows the engine's conventions: an absent namespace
    implies the registry's default namespace and an absent tag implies
    ``latest``.

    Example:
        ref = RegistryReference.parse("futuresecureai/fsai-os-frontend:v1.14.1")
        ref.namespace  # "futuresecureai"
        ref.render()   # "futuresecureai/fsai-os-frontend:v1.14.1"
    """

    model_config = {"frozen": True}

    namespace: str | None = Field(default=None, description="Organization or username")
    repository: str = Field(min_length=1, description="Repository name")
    tag: str | None = Field(default=None, description="Tag, if one was given")

    @classmethod
    def parse(cls, text: str) -> RegistryReference:
        """Parse a user-supplied reference such as ``org/repo:tag``.

        The tag is split on the last ``:`` that follows the last ``/``,
        so a namespace can never be mistaken for a tag.

        Args:
            text: Reference text

        Returns:
            Parsed reference

        Raises:
            InvalidReferenceError: If the namespace or repository part is empty
        """
        original = text
        text = text.strip()
        tag = None
        slash = text.rfind("/")
        colon = text.rfind(":")
        if colon > slash:
            text, tag = text[:colon], text[colon + 1 :] or None

        namespace = None
        if "/" in text:
            namespace, text = text.split("/", 1)

        if namespace == "":
            raise InvalidReferenceError(original)
        try:
            return cls(namespace=namespace, repository=text, tag=tag)
        except ValidationError:
            raise InvalidReferenceError(original)

    @property
    def has_tag(self) -> bool:
        return self.tag is not None

    def with_namespace(self, namespace: str) -> RegistryReference:
        """Get a copy qualified with a namespace, unless it already has one."""
        if self.namespace:
            return self
        return self.model_copy(update={"namespace": namespace})

    def with_tag(self, tag: str | None) -> RegistryReference:
        """Get a copy carrying a tag; an embedded tag is never replaced."""
        if self.has_tag:
            return self
        return self.model_copy(update={"tag": tag or DEFAULT_TAG})

    def repository_path(self, default_namespace: str = DEFAULT_NAMESPACE) -> str:
        """Get the ``namespace/repository`` path used by the hub API."""
        return f"{self.namespace or default_namespace}/{self.repository}"

    @property
    def name(self) -> str:
        """Get the reference without its tag."""
        if self.namespace:
            return f"{self.namespace}/{self.repository}"
        return self.repository

    def render(self) -> str:
        """Render as ``[namespace/]repository:tag``."""
        return f"{self.name}:{self.tag or DEFAULT_TAG}"

    def __str__(self) -> str:
        return self.render()
