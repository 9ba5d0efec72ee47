"""
Content-addressed hashing using SHA-1.

The digest covers the whole canonical encoding, so kind and size are
authenticated together with the content.
"""

import hashlib
import string
from typing import Union

from ..errors import InvalidDigestError
from .canonical import encode_object


HASH_ALGORITHM = 'sha1'
DIGEST_SIZE = 20
HEX_DIGEST_LENGTH = 40

_HEX_CHARS = frozenset(string.hexdigits.lower())


def compute_digest(encoded: bytes) -> bytes:
    """
    Compute the raw 20-byte digest of an encoded object.

    `encoded` must be the full canonical encoding, not the bare content.
    """
    return hashlib.new(HASH_ALGORITHM, encoded).digest()


def compute_hash(encoded: bytes) -> str:
    """Compute the hex digest of an encoded object."""
    return compute_digest(encoded).hex()


def compute_object_hash(kind: str, content: bytes) -> str:
    """
    Compute the hex digest of an object from its kind and content.

    Equivalent to hashing encode_object(kind, content).
    """
    return compute_hash(encode_object(kind, content))


def is_valid_hex_digest(digest: str) -> bool:
    """Check for exactly 40 lowercase hex characters."""
    return (
        isinstance(digest, str)
        and len(digest) == HEX_DIGEST_LENGTH
        and all(c in _HEX_CHARS for c in digest)
    )


def validate_digest(digest: Union[str, bytes]) -> str:
    """
    Normalize a digest to its 40-character hex form.

    Accepts a lowercase hex string or the 20 raw bytes found in tree entries.

    Raises InvalidDigestError for anything else.
    """
    if isinstance(digest, (bytes, bytearray)) and len(digest) == DIGEST_SIZE:
        return bytes(digest).hex()

    if not is_valid_hex_digest(digest):
        raise InvalidDigestError(digest)

    return digest


def get_hash_prefix(hash_str: str, prefix_length: int = 2) -> str:
    """
    Get prefix of hash for directory sharding.

    Default is 2 characters, creating 256 subdirectories.
    """
    if len(hash_str) < prefix_length:
        raise ValueError(f"Hash too short for prefix length {prefix_length}")
    return hash_str[:prefix_length]
