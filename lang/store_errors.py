"""Exceptions raised by the string store.

Expected conditions (unknown module, existing key, ...) are reported through
return values. These exceptions cover malformed documents and failed writes.
"""


class StringStoreError(Exception):
    """Base exception for string store errors.

    Attributes:
        message: Human-readable error message
        details: Optional additional details
    """

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentFormatError(StringStoreError):
    """Raised when a language document cannot be parsed."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message, details={'path': path})
        self.path = path


class StoreWriteError(StringStoreError):
    """Raised when a staged batch of document writes cannot be completed.

    Attributes:
        written_paths: Paths that were written before the failure
        failed_paths: Paths that were not written
    """

    def __init__(self, message: str, written_paths=None, failed_paths=None):
        self.written_paths = list(written_paths or [])
        self.failed_paths = list(failed_paths or [])
        super().__init__(message, details={
            'written': self.written_paths,
            'failed': self.failed_paths,
        })
