"""Login and repository enumeration against the hub."""

from __future__ import annotations

from typing import Callable, NamedTuple

from hubpull.models.credential import Credential
from hubpull.models.session import Session, get_session
from hubpull.registry.base import RegistryAuthError, RegistryError
from hubpull.registry.engine import DockerEngine
from hubpull.registry.hub import HubClient
from hubpull.utils.errors import AuthenticationError
from hubpull.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)


def list_with_basic_auth(hub: HubClient, credential: Credential) -> list[str]:
    """HTTP Basic with the identity as user and the token as password."""
    return hub.list_repositories(credential.identity, auth=(credential.identity, credential.token))


def list_with_session_token(hub: HubClient, credential: Credential) -> list[str]:
    """Exchange the pair for a session token, then send it as a JWT header."""
    session_token = hub.exchange_session_token(credential.identity, credential.token)
    return hub.list_repositories(credential.identity, authorization=f"JWT {session_token}")


def list_with_bearer_token(hub: HubClient, credential: Credential) -> list[str]:
    """Send the raw access token as a bearer credential."""
    return hub.list_repositories(credential.identity, authorization=f"Bearer {credential.token}")


class ListingTransport(NamedTuple):
    """One way of authenticating the repository listing call."""

    name: str
    fetch: Callable[[HubClient, Credential], list[str]]
    organization_tokens: bool = True


# Tried in order until one returns repositories. Organization tokens
# cannot be exchanged for a session token.
LISTING_TRANSPORTS: tuple[ListingTransport, ...] = (
    ListingTransport("basic", list_with_basic_auth),
    ListingTransport("session-token", list_with_session_token, organization_tokens=False),
    ListingTransport("bearer", list_with_bearer_token),
)


class AuthStrategist:
    """Establishes the session and enumerates a namespace's repositories.

    Login is a single attempt through the local engine. Listing is a
    separate capability: an accepted login does not mean the listing
    endpoint accepts the same credential, so each transport in
    ``LISTING_TRANSPORTS`` is tried until one yields repositories.

    Example:
        strategist = AuthStrategist(DockerEngine(), HubClient())
        session = strategist.login(credential)
        repositories = strategist.list_repositories(credential)
    """

    def __init__(
        self,
        engine: DockerEngine,
        hub: HubClient,
        session: Session | None = None,
        transports: tuple[ListingTransport, ...] = LISTING_TRANSPORTS,
    ) -> None:
        self._engine = engine
        self._hub = hub
        self._session = session
        self._transports = transports

    @property
    def session(self) -> Session:
        return self._session or get_session()

    def login(self, credential: Credential) -> Session:
        """Log in once with the given credential.

        Args:
            credential: Identity and token to log in with

        Returns:
            The established session

        Raises:
            AuthenticationError: If the login call did not succeed
            EngineError: If the daemon could not attempt the login
        """
        logger.debug(f"Logging in as '{credential.identity}' ({credential.identity_kind.value})")
        try:
            self._engine.login(credential.identity, credential.token)
        except RegistryAuthError as e:
            raise AuthenticationError(str(e), identity=credential.identity)

        session = self.session
        session.establish(credential)
        logger.info(f"Logged in as '{credential.identity}'")
        return session

    def list_repositories(self, credential: Credential) -> list[str]:
        """List repositories in the credential's namespace.

        Args:
            credential: Credential whose identity is the namespace

        Returns:
            Repository names from the first transport that yields any,
            or an empty list if none does
        """
        log = get_logger_with_context(__name__, namespace=credential.identity)
        for transport in self._transports:
            if credential.is_organization and not transport.organization_tokens:
                log.debug(f"Skipping {transport.name} listing for organization token")
                continue
            try:
                names = transport.fetch(self._hub, credential)
            except RegistryError as e:
                log.debug(f"{transport.name} listing failed: {e}")
                continue
            if names:
                log.debug(f"{transport.name} listing returned {len(names)} repositories")
                return names
            log.debug(f"{transport.name} listing returned no repositories")

        log.info("Could not enumerate repositories")
        return []
