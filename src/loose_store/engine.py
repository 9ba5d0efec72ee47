"""
Loose Store Engine.

Main entry point coordinating all components.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from .errors import LooseStoreError, StorageError, UnexpectedObjectKindError
from .integrity.hashing import validate_digest
from .model.blob import BLOB_KIND, Blob
from .model.tree import TREE_KIND, Tree, TreeEntry
from .storage.layout import StorageLayout
from .storage.object_store import ObjectStore


logger = logging.getLogger(__name__)


class LooseStoreEngine:
    """
    Main engine for loose object operations.

    This is the primary interface for:
    - Bootstrapping a repository directory
    - Hashing and storing blobs
    - Retrieving and inspecting objects
    - Listing tree entries
    - Verifying stored objects
    """

    def __init__(self, git_dir: Union[str, Path]):
        """
        Initialize engine for a repository directory.

        Args:
            git_dir: the directory holding `objects/`, usually `.git`
        """
        self.git_dir = Path(git_dir).resolve()
        self.layout = StorageLayout(self.git_dir)
        self.object_store = ObjectStore(self.layout)

    def initialize(self) -> bool:
        """
        Initialize the repository.

        Creates necessary directory structure.
        Safe to call multiple times (idempotent).
        """
        return self.layout.initialize()

    # ========== Object Storage ==========

    def hash_object(self, content: bytes, kind: str = BLOB_KIND, write: bool = False) -> str:
        """
        Hash content as an object of `kind`, storing it if `write` is set.

        Returns:
            str: hex digest of the object
        """
        return self.object_store.hash_object(kind, content, write=write)

    def hash_file(
        self,
        path: Union[str, Path],
        kind: str = BLOB_KIND,
        write: bool = False,
    ) -> str:
        """Hash the contents of a file, storing it if `write` is set."""
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise StorageError("read_source", str(path), e)
        return self.hash_object(content, kind, write=write)

    def put_blob(self, data: bytes) -> str:
        """Store a blob and return its hash."""
        return self.object_store.write(BLOB_KIND, data)

    def get_blob(self, blob_hash: Union[str, bytes]) -> Blob:
        """Retrieve a blob by hash."""
        return Blob(self._read_expecting(blob_hash, BLOB_KIND))

    def get_tree(self, tree_hash: Union[str, bytes]) -> Tree:
        """Retrieve and decode a tree by hash."""
        return Tree.from_content(self._read_expecting(tree_hash, TREE_KIND))

    def has_object(self, obj_hash: Union[str, bytes]) -> bool:
        """Check if an object exists."""
        return self.object_store.has_object(obj_hash)

    # ========== Inspection ==========

    def read_object(self, obj_hash: Union[str, bytes]) -> tuple[str, bytes]:
        """Get an object's kind and content."""
        return self.object_store.read(obj_hash)

    def cat_file(self, obj_hash: Union[str, bytes]) -> bytes:
        """Get an object's content without its header."""
        _, content = self.object_store.read(obj_hash)
        return content

    def object_kind(self, obj_hash: Union[str, bytes]) -> str:
        """Get an object's kind."""
        kind, _ = self.object_store.read_header(obj_hash)
        return kind

    def object_size(self, obj_hash: Union[str, bytes]) -> int:
        """Get an object's size as declared in its header."""
        _, size = self.object_store.read_header(obj_hash)
        return size

    def list_tree(self, tree_hash: Union[str, bytes]) -> List[TreeEntry]:
        """
        List the entries of a tree object in encoded order.

        Raises UnexpectedObjectKindError if the object is not a tree.
        """
        return self.get_tree(tree_hash).entries

    # ========== Integrity Verification ==========

    def verify_object(self, obj_hash: Union[str, bytes]) -> bool:
        """
        Verify an object's integrity.

        Returns True if valid.
        Raises CorruptObjectError if the size or hash do not match.
        """
        self.object_store.read(obj_hash, verify=True)
        return True

    def detect_tampering(self) -> Dict[str, object]:
        """
        Detect tampering across all stored objects.

        Returns dict with:
            - tampered: list of tampered object hashes
            - verified: count of verified objects
            - errors: list of errors encountered
        """
        result = {
            'tampered': [],
            'verified': 0,
            'errors': [],
        }

        for obj_hash in self.object_store.list_all_objects():
            try:
                self.verify_object(obj_hash)
                result['verified'] += 1
            except LooseStoreError as e:
                logger.warning("Object %s failed verification: %s", obj_hash, e)
                result['tampered'].append(obj_hash)
                result['errors'].append(f"{obj_hash}: {e}")

        return result

    # ========== Statistics and Diagnostics ==========

    def get_statistics(self) -> Dict[str, int]:
        """Get store statistics."""
        return self.object_store.get_stats()

    def list_all_objects(self) -> List[str]:
        """List all object hashes in store."""
        return self.object_store.list_all_objects()

    def _read_expecting(self, obj_hash: Union[str, bytes], expected: str) -> bytes:
        kind, content = self.object_store.read(obj_hash)
        if kind != expected:
            raise UnexpectedObjectKindError(validate_digest(obj_hash), expected, kind)
        return content

    def __repr__(self) -> str:
        stats = self.get_statistics()
        return (
            f"LooseStoreEngine("
            f"path={self.git_dir}, "
            f"objects={stats.get('total_objects', 0)})"
        )
