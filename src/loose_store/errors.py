"""
Error types for loose object store operations.

All errors are explicit and never silent.
"""

from typing import Optional


class LooseStoreError(Exception):
    """Base exception for all loose object store errors."""
    pass


class InvalidDigestError(LooseStoreError):
    """Raised when a digest is not 40 lowercase hex characters or 20 raw bytes."""

    def __init__(self, digest):
        self.digest = digest
        super().__init__(f"Invalid object name: {digest!r}")


class ObjectNotFoundError(LooseStoreError):
    """Raised when a requested object does not exist."""

    def __init__(self, object_hash: str):
        self.object_hash = object_hash
        super().__init__(f"Object not found: {object_hash}")


class CorruptObjectError(LooseStoreError):
    """Raised when a stored object cannot be decompressed or parsed."""

    def __init__(self, object_hash: str, reason: str):
        self.object_hash = object_hash
        self.reason = reason
        super().__init__(f"Corrupt object {object_hash}: {reason}")


class MalformedTreeError(LooseStoreError):
    """Raised when a tree body violates the entry framing."""

    def __init__(self, reason: str, offset: int):
        self.reason = reason
        self.offset = offset
        super().__init__(f"Malformed tree at offset {offset}: {reason}")


class UnexpectedObjectKindError(LooseStoreError):
    """Raised when an object is not of the kind an operation requires."""

    def __init__(self, object_hash: str, expected: str, actual: str):
        self.object_hash = object_hash
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Object {object_hash} is a {actual}, expected {expected}"
        )


class StorageError(LooseStoreError):
    """Raised when filesystem operations fail."""

    def __init__(self, operation: str, path: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        msg = f"Storage error during {operation}: {path}"
        if cause:
            msg += f"\nCause: {cause}"
        super().__init__(msg)
