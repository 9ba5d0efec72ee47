"""
Content-addressed object storage.

Provides immutable, zlib-compressed loose object storage.
"""

import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import Tuple, Union

from ..errors import (
    CorruptObjectError,
    ObjectNotFoundError,
    StorageError,
)
from ..integrity.canonical import encode_object, parse_header
from ..integrity.hashing import compute_hash, validate_digest
from ..integrity.verification import verify_object_integrity, verify_object_size
from .layout import StorageLayout


logger = logging.getLogger(__name__)

COMPRESSION_LEVEL = zlib.Z_DEFAULT_COMPRESSION
# Stored objects are read-only, as git writes them.
OBJECT_FILE_MODE = 0o444


class ObjectStore:
    """
    Content-addressed object store with immutable objects.

    Objects are stored by the hash of their canonical encoding.
    Once written, objects never change.
    """

    def __init__(self, layout: StorageLayout):
        """Initialize object store with given layout."""
        self.layout = layout

    def write(self, kind: str, content: bytes) -> str:
        """
        Store an object and return its hex digest.

        The object is stored immutably:
        - Hash is computed from the canonical encoding
        - The same encoding is compressed and written atomically
        - Rewriting an existing object produces identical bytes

        Returns the content hash.
        """
        encoded = encode_object(kind, content)
        digest = compute_hash(encoded)

        self.layout.ensure_object_directory(digest)
        obj_path = self.layout.get_object_path(digest)
        self._write_object_atomic(obj_path, zlib.compress(encoded, COMPRESSION_LEVEL))

        logger.debug("Wrote %s %s (%d bytes)", kind, digest, len(content))
        return digest

    def hash_object(self, kind: str, content: bytes, write: bool = False) -> str:
        """
        Compute an object's digest, storing it only if `write` is set.
        """
        if write:
            return self.write(kind, content)
        return compute_hash(encode_object(kind, content))

    def read(self, digest: Union[str, bytes], verify: bool = False) -> Tuple[str, bytes]:
        """
        Retrieve an object by its digest.

        Returns (kind, content). The body length is not compared with the
        declared size unless verify=True, which also rechecks the hash.

        Raises InvalidDigestError if the digest is malformed.
        Raises ObjectNotFoundError if object doesn't exist.
        Raises CorruptObjectError if the object cannot be decoded.
        """
        hex_digest = validate_digest(digest)
        kind, declared_size, content = self._load(hex_digest)

        if verify:
            verify_object_size(hex_digest, declared_size, content)
            verify_object_integrity(hex_digest, kind, content)

        logger.debug("Read %s %s (%d bytes)", kind, hex_digest, len(content))
        return kind, content

    def read_header(self, digest: Union[str, bytes]) -> Tuple[str, int]:
        """Get an object's kind and declared size."""
        kind, declared_size, _ = self._load(validate_digest(digest))
        return kind, declared_size

    def has_object(self, digest: Union[str, bytes]) -> bool:
        """Check if an object exists in the store."""
        return self.layout.object_exists(digest)

    def list_all_objects(self) -> list[str]:
        """List all object digests in the store."""
        return self.layout.list_all_objects()

    def get_stats(self) -> dict:
        """Get storage statistics."""
        return self.layout.get_storage_stats()

    def _load(self, hex_digest: str) -> Tuple[str, int, bytes]:
        """Read, decompress and split an object into kind, size and body."""
        obj_path = self.layout.get_object_path(hex_digest)

        try:
            compressed = obj_path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(hex_digest)
        except OSError as e:
            raise StorageError("read_file", str(obj_path), e)

        decompressor = zlib.decompressobj()
        try:
            data = decompressor.decompress(compressed)
        except zlib.error as e:
            raise CorruptObjectError(hex_digest, f"decompression failed: {e}")

        if not decompressor.eof:
            raise CorruptObjectError(hex_digest, "truncated compressed stream")
        if decompressor.unused_data:
            raise CorruptObjectError(hex_digest, "garbage at end of object")

        try:
            return parse_header(data)
        except ValueError as e:
            raise CorruptObjectError(hex_digest, str(e))

    def _write_object_atomic(self, path: Path, data: bytes) -> None:
        """
        Write object file atomically.

        Uses temp file + rename, so concurrent writers of the same object
        leave one complete file behind.
        """
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=str(path.parent),
                prefix='.tmp_',
            )
        except OSError as e:
            raise StorageError("write_file", str(path), e)

        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.chmod(temp_path, OBJECT_FILE_MODE)
            os.replace(temp_path, path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StorageError("write_file", str(path), e)
