"""Core resolution and authentication engine."""

from hubpull.core.auth import LISTING_TRANSPORTS, AuthStrategist, ListingTransport
from hubpull.core.credentials import CredentialStore, parse_credential_text
from hubpull.core.inventory import ImageInventory, RemovalReport, parse_removal_selection
from hubpull.core.resolver import ReferenceResolver, ResolveMode, ResolverPrompts

__all__ = [
    "LISTING_TRANSPORTS",
    "AuthStrategist",
    "ListingTransport",
    "CredentialStore",
    "parse_credential_text",
    "ImageInventory",
    "RemovalReport",
    "parse_removal_selection",
    "ReferenceResolver",
    "ResolveMode",
    "ResolverPrompts",
]
