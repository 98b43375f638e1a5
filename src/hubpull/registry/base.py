"""Registry exception types."""


class RegistryError(Exception):
    """Base exception for registry operations."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class RegistryAuthError(RegistryError):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed", status_code: int | None = None) -> None:
        super().__init__(message, code="AUTH_ERROR", status_code=status_code)


class RegistryNotFoundError(RegistryError):
    """Repository or namespace not found."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Not found: {reference}", code="NOT_FOUND", status_code=404)
        self.reference = reference
