"""hubpull: an interactive assistant for pulling Docker Hub images.

Resolves loosely specified input (a list number, a bare repository name,
an organization-qualified name, or a search term) into a complete
``namespace/repository:tag`` reference, and establishes an authenticated
session with organization or personal access tokens when private
repositories are involved.

Usage:
    # Library API
    from hubpull import CredentialStore, AuthStrategist, ReferenceResolver

    store = CredentialStore(".docker-credentials")
    credential = store.load()

    strategist = AuthStrategist(DockerEngine(), HubClient())
    session = strategist.login(credential)
    repositories = strategist.list_repositories(credential)

CLI:
    hubpull pull
    hubpull login
    hubpull images
    hubpull search <term>
    hubpull tags <repository>
"""

__version__ = "0.1.0"

from hubpull.core.auth import AuthStrategist
from hubpull.core.credentials import CredentialStore
from hubpull.core.resolver import ReferenceResolver, ResolveMode
from hubpull.models.credential import Credential, IdentityKind, TokenType
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList
from hubpull.models.session import Session, SessionMode, get_session
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient

__all__ = [
    "__version__",
    "AuthStrategist",
    "CredentialStore",
    "ReferenceResolver",
    "ResolveMode",
    "Credential",
    "IdentityKind",
    "TokenType",
    "RegistryReference",
    "SelectionList",
    "Session",
    "SessionMode",
    "get_session",
    "DockerEngine",
    "HubClient",
]
