class LibraryError(Exception):
    """Base class for errors raised by the catalog and the borrow ledger."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LibraryError):
    def __init__(self, message: str = "Validation failed", details: dict | None = None):
        super().__init__(message)
        self.details = details


class NotFoundError(LibraryError):
    pass


class InsufficientInventoryError(LibraryError):
    pass


class PersistenceError(LibraryError):
    """Store failure. `retryable` is set for timeouts and lost connections."""

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable
