"""Registry and local engine clients."""

from hubpull.registry.base import RegistryAuthError, RegistryError, RegistryNotFoundError
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient

__all__ = [
    "RegistryAuthError",
    "RegistryError",
    "RegistryNotFoundError",
    "DockerEngine",
    "HubClient",
]
