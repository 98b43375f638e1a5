"""Local container engine client."""

from __future__ import annotations

import subprocess
from typing import Any

import docker
from docker.errors import APIError, DockerException

from hubpull.models.credential import Credential
from hubpull.models.image import LocalImage
from hubpull.models.reference import DEFAULT_TAG, RegistryReference
from hubpull.registry.base import RegistryAuthError
from hubpull.utils.errors import EngineError
from hubpull.utils.logging import get_logger
from hubpull.utils.tracing import CallTracer, get_tracer

logger = get_logger(__name__)

UNTAGGED = "<none>:<none>"


class DockerEngine:
    """Client for the local Docker daemon.

    This client uses the Docker SDK to check daemon health, log in,
    inspect and remove local images, and pull the resolved reference.

    Example:
        engine = DockerEngine()
        engine.ping()
        engine.pull(RegistryReference.parse("nginx:1.27"))
    """

    def __init__(self, client: Any = None, tracer: CallTracer | None = None) -> None:
        """Initialize the engine client.

        Args:
            client: Optional pre-built Docker SDK client
            tracer: Debug tracer (defaults to the process-wide tracer)
        """
        self._client = client
        self._tracer = tracer

    @property
    def tracer(self) -> CallTracer:
        return self._tracer or get_tracer()

    @property
    def client(self) -> Any:
        """Get the Docker client, creating it if necessary."""
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as e:
                raise EngineError(
                    f"Failed to connect to Docker daemon: {e}. "
                    "Start Docker and try again.",
                    operation="connect",
                )
        return self._client

    def ping(self) -> None:
        """Check that the daemon is reachable.

        Raises:
            EngineError: If the daemon is not running
        """
        self.tracer.engine_call("ping")
        try:
            result = self.client.ping()
        except DockerException as e:
            raise EngineError(
                f"Docker daemon is not running: {e}. Start Docker and try again.",
                operation="ping",
            )
        self.tracer.engine_result("ping", result)

    def login(self, identity: str, token: str, registry: str | None = None) -> None:
        """Log the daemon in to the registry.

        Success is the absence of an API error; the status text the
        daemon returns is not inspected.

        Args:
            identity: Organization name or username
            token: Access token
            registry: Registry server (defaults to Docker Hub)

        Raises:
            RegistryAuthError: If the registry rejected the credentials
            EngineError: If the daemon could not be reached
        """
        self.tracer.engine_call("login", username=identity, password=token, registry=registry)
        try:
            result = self.client.login(
                username=identity, password=token, registry=registry, reauth=True
            )
        except APIError as e:
            self.tracer.engine_result("login", str(e))
            raise RegistryAuthError(f"Login failed for '{identity}': {e.explanation or e}")
        except DockerException as e:
            raise EngineError(f"Login could not be attempted: {e}", operation="login")
        self.tracer.engine_result("login", result)

    def list_images(self) -> list[LocalImage]:
        """List local images, one row per tag."""
        self.tracer.engine_call("images.list")
        try:
            images = self.client.images.list()
        except DockerException as e:
            raise EngineError(f"Failed to list images: {e}", operation="images.list")

        rows = []
        for image in images:
            size = (image.attrs or {}).get("Size") or 0
            for tag in image.tags or [UNTAGGED]:
                rows.append(LocalImage(reference=tag, image_id=image.id, size=size))
        self.tracer.engine_result("images.list", [row.reference for row in rows])
        return rows

    def remove_image(self, image_id: str) -> bool:
        """Remove an image and any containers created from it.

        Args:
            image_id: Image ID

        Returns:
            True if the image was removed
        """
        self.tracer.engine_call("images.remove", image_id=image_id)
        try:
            containers = self.client.containers.list(all=True, filters={"ancestor": image_id})
            for container in containers:
                container.stop()
                container.remove()
            self.client.images.remove(image_id, force=True)
        except DockerException as e:
            logger.warning(f"Could not remove image {image_id}: {e}")
            self.tracer.engine_result("images.remove", str(e))
            return False
        self.tracer.engine_result("images.remove", {"removed": image_id, "containers": len(containers)})
        return True

    def prune(self) -> int:
        """Remove stopped containers, unused networks and dangling images.

        Returns:
            Bytes reclaimed
        """
        self.tracer.engine_call("prune")
        reclaimed = 0
        try:
            for result in (
                self.client.containers.prune(),
                self.client.networks.prune(),
                self.client.images.prune(filters={"dangling": True}),
            ):
                reclaimed += (result or {}).get("SpaceReclaimed") or 0
        except DockerException as e:
            raise EngineError(f"Failed to clean up unused data: {e}", operation="prune")
        self.tracer.engine_result("prune", {"space_reclaimed": reclaimed})
        return reclaimed

    def pull(self, reference: RegistryReference, credential: Credential | None = None) -> str:
        """Pull an image.

        Args:
            reference: Fully resolved reference
            credential: Credential for private repositories

        Returns:
            The rendered reference that was pulled

        Raises:
            EngineError: If the pull failed
        """
        auth_config = None
        if credential is not None:
            auth_config = {"username": credential.identity, "password": credential.token}

        rendered = reference.render()
        self.tracer.engine_call(
            "images.pull", repository=reference.name, tag=reference.tag, auth_config=auth_config
        )
        try:
            image = self.client.images.pull(
                reference.name, tag=reference.tag or DEFAULT_TAG, auth_config=auth_config
            )
        except DockerException as e:
            raise EngineError(f"Failed to pull {rendered}: {e}", operation="images.pull")
        self.tracer.engine_result("images.pull", getattr(image, "id", image))
        return rendered

    def scan(self, reference: str, command: list[str]) -> int:
        """Run a vulnerability scanner against an image.

        Args:
            reference: Image reference to scan
            command: Scanner command; the reference is appended

        Returns:
            Scanner exit code
        """
        cmd = [*command, reference]
        self.tracer.engine_call("scan", command=cmd)
        try:
            result = subprocess.run(cmd, text=True)
        except FileNotFoundError:
            raise EngineError(f"Scanner not found: {command[0]}", operation="scan")
        self.tracer.engine_result("scan", {"returncode": result.returncode})
        return result.returncode
