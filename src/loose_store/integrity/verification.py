"""
Integrity verification for stored objects.

Reads do not verify by default. These checks are for callers that need
strict integrity.
"""

from ..errors import CorruptObjectError
from .hashing import compute_object_hash


def verify_object_size(object_hash: str, declared_size: int, content: bytes) -> None:
    """
    Verify that the body length matches the size declared in the header.

    Raises CorruptObjectError if mismatch detected.
    """
    if declared_size != len(content):
        raise CorruptObjectError(
            object_hash,
            f"declared size {declared_size} but body has {len(content)} bytes",
        )


def verify_object_integrity(object_hash: str, kind: str, content: bytes) -> None:
    """
    Verify that an object's kind and content hash to its name.

    Raises CorruptObjectError if mismatch detected.
    """
    actual_hash = compute_object_hash(kind, content)
    if actual_hash != object_hash:
        raise CorruptObjectError(
            object_hash,
            f"content hashes to {actual_hash}",
        )
