"""Process-wide session state."""

from __future__ import annotations

from enum import Enum

from hubpull.models.credential import Credential, IdentityKind
from hubpull.utils.errors import SessionError


class SessionMode(str, Enum):
    """Which image source the session is scoped to."""

    ORGANIZATION_SCOPED = "organization_scoped"
    PUBLIC_SEARCH = "public_search"


class Session:
    """Authentication state for one run of the tool.

    Starts unauthenticated in public-search mode. ``establish`` is the
    only transition and may fire once; afterwards the session is
    read-only.

    Example:
        session = get_session()
        session.establish(credential)
        if session.mode == SessionMode.ORGANIZATION_SCOPED:
            ...
    """

    def __init__(self) -> None:
        self._authenticated = False
        self._credential: Credential | None = None
        self._mode = SessionMode.PUBLIC_SEARCH
        self._established = False

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    @property
    def identity(self) -> str | None:
        return self._credential.identity if self._credential else None

    @property
    def token(self) -> str | None:
        return self._credential.token if self._credential else None

    @property
    def identity_kind(self) -> IdentityKind | None:
        return self._credential.identity_kind if self._credential else None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def mode(self) -> SessionMode:
        return self._mode

    def establish(self, credential: Credential) -> None:
        """Record a successful login.

        Args:
            credential: The credential that logged in

        Raises:
            SessionError: If the session was already established
        """
        if self._established:
            raise SessionError()
        self._established = True
        self._authenticated = True
        self._credential = credential
        if credential.identity_kind == IdentityKind.ORGANIZATION:
            self._mode = SessionMode.ORGANIZATION_SCOPED
        else:
            self._mode = SessionMode.PUBLIC_SEARCH

    def __repr__(self) -> str:
        return (
            f"Session(authenticated={self._authenticated}, "
            f"identity={self.identity!r}, mode={self._mode.value!r})"
        )


# Global session instance
_session: Session | None = None


def get_session() -> Session:
    """Get the process-wide session, creating it on first access."""
    global _session
    if _session is None:
        _session = Session()
    return _session


def reset_session() -> Session:
    """Replace the process-wide session with a fresh one."""
    global _session
    _session = Session()
    return _session
