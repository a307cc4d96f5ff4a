"""Service Catalog exception hierarchy."""


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(self, message: str = "", code: str = "CATALOG_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidArgumentError(CatalogError):
    """Raised when a caller-supplied argument is out of range (e.g. id <= 0)."""

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, code="INVALID_ARGUMENT")


class ServiceNotFoundError(CatalogError):
    """Raised when no service exists with the requested id."""

    def __init__(self, message: str = "Service not found"):
        super().__init__(message, code="NOT_FOUND")


class StoreFailureError(CatalogError):
    """Raised when the backing store fails.

    The underlying exception is chained as ``__cause__`` for logging; its text
    is never part of ``message``.
    """

    def __init__(self, message: str = "Query failed"):
        super().__init__(message, code="STORE_FAILURE")
