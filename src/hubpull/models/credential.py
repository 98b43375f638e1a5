"""Credential models."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Default token value in a freshly written credential file; the store
# treats its configured placeholder as "no token".
PLACEHOLDER_TOKEN = "your-token-here"


class IdentityKind(str, Enum):
    """Whom a token was issued to."""

    ORGANIZATION = "organization"
    PERSONAL = "personal"


class TokenType(str, Enum):
    """Token type as written in the credential file."""

    OAT = "oat"
    PAT = "pat"

    @property
    def identity_kind(self) -> IdentityKind:
        """Get the identity kind this token type belongs to."""
        if self == TokenType.OAT:
            return IdentityKind.ORGANIZATION
        return IdentityKind.PERSONAL

    @classmethod
    def for_kind(cls, kind: IdentityKind) -> "TokenType":
        """Get the token type written for an identity kind."""
        return cls.OAT if kind == IdentityKind.ORGANIZATION else cls.PAT


class Credential(BaseModel):
    """An identity and the access token that authenticates it.

    An organization access token (OAT) is used with the organization
    name as its identity; a personal access token (PAT) with the
    account's username.
    """

    model_config = {"frozen": True}

    identity: str = Field(min_length=1, description="Organization name or username")
    token: str = Field(min_length=1, description="Access token")
    identity_kind: IdentityKind = Field(description="Organization or personal identity")

    @field_validator("identity", "token")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def token_type(self) -> TokenType:
        """Get the token type for this credential."""
        return TokenType.for_kind(self.identity_kind)

    @property
    def is_organization(self) -> bool:
        """Whether this is an organization credential."""
        return self.identity_kind == IdentityKind.ORGANIZATION

    def __repr__(self) -> str:
        return (
            f"Credential(identity={self.identity!r}, token='****', "
            f"identity_kind={self.identity_kind.value!r})"
        )
