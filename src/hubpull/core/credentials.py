"""Persisted credential file."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from hubpull.models.credential import PLACEHOLDER_TOKEN, Credential, IdentityKind, TokenType
from hubpull.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_TYPE_KEY = "TOKEN_TYPE"
ORG_KEY = "DOCKER_ORG"
USERNAME_KEY = "DOCKER_USERNAME"
TOKEN_KEY = "DOCKER_TOKEN"
DEBUG_KEY = "DEBUG"

CREDENTIAL_KEYS = (TOKEN_TYPE_KEY, ORG_KEY, USERNAME_KEY, TOKEN_KEY)

FILE_TEMPLATE = """\
# Docker Hub Credentials
# Keep this file out of version control.

# Token type: "oat" for Organization Access Token, "pat" for Personal Access Token
TOKEN_TYPE={token_type}

# Your Docker Hub organization name (for OAT tokens)
DOCKER_ORG={org}

# Your Docker Hub username (for PAT tokens)
DOCKER_USERNAME={username}

# Your Docker Hub access token
DOCKER_TOKEN={token}

# Echo every registry and engine call: "true" or "false"
DEBUG={debug}
"""


def parse_credential_text(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines.

    Supports the format the shell would source:
    - KEY=value
    - KEY="quoted value" / KEY='quoted value'
    - export KEY=value
    - # comments and empty lines are ignored
    """
    values: dict[str, str] = {}

    for line in text.splitlines():
        line = line.strip()

        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]

        values[key] = value

    return values


def _quote(value: str) -> str:
    if '"' in value:
        return f"'{value}'"
    return f'"{value}"'


def _is_true(value: str | None) -> bool:
    return (value or "").strip().lower() in ("true", "1", "yes")


class CredentialStore:
    """Reads and writes the hand-editable credential file.

    The file holds ``TOKEN_TYPE``, ``DOCKER_ORG``, ``DOCKER_USERNAME``,
    ``DOCKER_TOKEN`` and ``DEBUG``. A file that is missing, unreadable
    or incomplete yields no credential rather than an error, so the
    caller can fall back to interactive entry.

    Example:
        store = CredentialStore(Path(".docker-credentials"))
        credential = store.load()
        if credential is None:
            credential = ask_user()
            store.save(credential)
    """

    def __init__(self, path: Path | str, placeholder_token: str = PLACEHOLDER_TOKEN) -> None:
        self._path = Path(path)
        self._placeholder_token = placeholder_token

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read_values(self) -> dict[str, str]:
        """Read all key-value pairs from the file.

        Returns:
            Parsed values, empty if the file is missing or unreadable
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read credential file {self._path}: {e}")
            return {}
        return parse_credential_text(text)

    def debug_enabled(self) -> bool:
        """Whether the file turns on debug echo of external calls."""
        return _is_true(self.read_values().get(DEBUG_KEY))

    def load(self) -> Credential | None:
        """Load the saved credential.

        The organization name is used when the token type is ``oat``
        and an organization is set; otherwise the username is used.

        Returns:
            The credential, or None if absent or incomplete
        """
        values = self.read_values()
        if not values:
            return None

        missing = [key for key in CREDENTIAL_KEYS if key not in values]
        if missing:
            logger.info(f"Credential file {self._path} is missing {', '.join(missing)}")
            return None

        try:
            token_type = TokenType(values[TOKEN_TYPE_KEY].strip().lower())
        except ValueError:
            logger.info(f"Unknown {TOKEN_TYPE_KEY} '{values[TOKEN_TYPE_KEY]}' in {self._path}")
            return None

        org = values[ORG_KEY].strip()
        username = values[USERNAME_KEY].strip()
        if token_type == TokenType.OAT and org:
            identity = org
        elif username:
            identity = username
        else:
            logger.info(f"No organization or username set in {self._path}")
            return None

        token = values[TOKEN_KEY].strip()
        if token == self._placeholder_token:
            logger.info(f"Token in {self._path} is still the placeholder")
            return None

        try:
            return Credential(identity=identity, token=token, identity_kind=token_type.identity_kind)
        except ValidationError as e:
            logger.info(f"Credential file {self._path} is incomplete: {e.error_count()} problem(s)")
            return None

    def save(self, credential: Credential) -> Path:
        """Write a credential, replacing any existing file.

        The content goes to a temporary file in the same directory which
        is then renamed over the target, so a failed write leaves the
        previous file intact. The current ``DEBUG`` setting is kept.

        Args:
            credential: Credential to save

        Returns:
            Path where the credential was saved
        """
        is_org = credential.identity_kind == IdentityKind.ORGANIZATION
        content = FILE_TEMPLATE.format(
            token_type=_quote(credential.token_type.value),
            org=_quote(credential.identity if is_org else ""),
            username=_quote("" if is_org else credential.identity),
            token=_quote(credential.token),
            debug=_quote("true" if self.debug_enabled() else "false"),
        )

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Credentials saved to {self._path}")
        return self._path
