"""Error handling utilities for hubpull."""

from __future__ import annotations

from typing import Any


class HubPullError(Exception):
    """Base exception for hubpull."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(HubPullError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class AuthenticationError(HubPullError):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed", identity: str | None = None):
        details = {"identity": identity} if identity else {}
        super().__init__(message, code="AUTH_ERROR", details=details)


class SelectionOutOfRangeError(HubPullError, IndexError):
    """A numeric choice fell outside the displayed list."""

    def __init__(self, index: int, size: int):
        if size:
            message = f"Invalid selection: {index} (valid: 1-{size})"
        else:
            message = f"Invalid selection: {index} (no list to select from)"
        super().__init__(
            message,
            code="SELECTION_OUT_OF_RANGE",
            details={"index": index, "size": size},
        )
        self.index = index
        self.size = size


class SessionError(HubPullError):
    """The session was written more than once."""

    def __init__(self, message: str = "Session is already established"):
        super().__init__(message, code="SESSION_ERROR")


class EngineError(HubPullError):
    """Local container engine is unavailable or an engine operation failed."""

    def __init__(self, message: str, operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, code="ENGINE_ERROR", details=details)
        self.operation = operation


class InvalidReferenceError(HubPullError):
    """User input does not name a repository."""

    def __init__(self, text: str):
        super().__init__(
            f"Invalid image reference: '{text}' (expected [namespace/]repository[:tag])",
            code="INVALID_REFERENCE",
            details={"reference": text},
        )
        self.text = text
