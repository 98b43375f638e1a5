"""Data models for hubpull."""

from hubpull.models.credential import (
    PLACEHOLDER_TOKEN,
    Credential,
    IdentityKind,
    TokenType,
)
from hubpull.models.image import LocalImage, SearchResult
from hubpull.models.reference import DEFAULT_NAMESPACE, DEFAULT_TAG, RegistryReference
from hubpull.models.selection import SelectionEntry, SelectionList, is_index_selection
from hubpull.models.session import Session, SessionMode, get_session, reset_session

__all__ = [
    "PLACEHOLDER_TOKEN",
    "Credential",
    "IdentityKind",
    "TokenType",
    "LocalImage",
    "SearchResult",
    "DEFAULT_NAMESPACE",
    "DEFAULT_TAG",
    "RegistryReference",
    "SelectionEntry",
    "SelectionList",
    "is_index_selection",
    "Session",
    "SessionMode",
    "get_session",
    "reset_session",
]
