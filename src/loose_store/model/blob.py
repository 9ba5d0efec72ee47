"""
Blob object model.

Blobs store raw binary data content-addressed by hash.
"""

from ..integrity.canonical import encode_object
from ..integrity.hashing import compute_object_hash


BLOB_KIND = 'blob'


class Blob:
    """
    Immutable blob object containing raw data.

    Blobs are leaf objects - they contain no references.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)

    def encode(self) -> bytes:
        """Get the canonical encoding that is hashed and stored."""
        return encode_object(BLOB_KIND, self.data)

    def compute_hash(self) -> str:
        """Compute content hash of this blob."""
        return compute_object_hash(BLOB_KIND, self.data)

    def size(self) -> int:
        """Get size of blob data in bytes."""
        return len(self.data)

    def __repr__(self) -> str:
        size = len(self.data)
        hash_preview = self.compute_hash()[:8]
        return f"Blob(size={size}, hash={hash_preview}...)"
