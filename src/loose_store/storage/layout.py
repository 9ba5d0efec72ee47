"""
Filesystem layout for loose object storage.

Implements content-addressed storage with directory sharding.
"""

import logging
from pathlib import Path
from typing import Union

from ..errors import StorageError
from ..integrity.hashing import get_hash_prefix, is_valid_hex_digest, validate_digest


logger = logging.getLogger(__name__)

DEFAULT_HEAD = 'ref: refs/heads/master\n'


class StorageLayout:
    """
    Manages filesystem layout for content-addressed objects.

    Layout:
        git_dir/
            objects/
                <2 hex chars>/
                    <38 hex chars>   # compressed object
            refs/
                heads/
                tags/
            HEAD
    """

    def __init__(self, git_dir: Union[str, Path]):
        """Initialize storage layout at given root."""
        self.git_dir = Path(git_dir).resolve()
        self.objects_dir = self.git_dir / "objects"
        self.refs_dir = self.git_dir / "refs"
        self.head_path = self.git_dir / "HEAD"

    def initialize(self) -> bool:
        """
        Initialize repository directory structure.

        Idempotent - safe to call multiple times. An existing HEAD is
        left untouched.

        Returns True if the repository was created, False if it existed.
        """
        existed = self.is_initialized()
        try:
            self.git_dir.mkdir(parents=True, exist_ok=True)
            self.objects_dir.mkdir(exist_ok=True)
            (self.refs_dir / "heads").mkdir(parents=True, exist_ok=True)
            (self.refs_dir / "tags").mkdir(exist_ok=True)
            if not self.head_path.exists():
                self.head_path.write_text(DEFAULT_HEAD, encoding='utf-8')
        except OSError as e:
            raise StorageError("initialize", str(self.git_dir), e)

        logger.debug("Initialized repository layout at %s", self.git_dir)
        return not existed

    def is_initialized(self) -> bool:
        """Check if the objects directory exists."""
        return self.objects_dir.is_dir()

    def get_object_path(self, digest: Union[str, bytes]) -> Path:
        """
        Get filesystem path for an object by its digest.

        The digest is validated before any path is built.
        First 2 hex characters name the directory, the other 38 the file.
        """
        hex_digest = validate_digest(digest)
        prefix = get_hash_prefix(hex_digest, 2)
        return self.objects_dir / prefix / hex_digest[2:]

    def ensure_object_directory(self, digest: Union[str, bytes]) -> Path:
        """
        Ensure the directory for an object exists.

        Only the prefix directory is created; the objects directory must
        already exist.
        """
        prefix_dir = self.get_object_path(digest).parent
        try:
            prefix_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise StorageError("mkdir", str(prefix_dir), e)
        return prefix_dir

    def object_exists(self, digest: Union[str, bytes]) -> bool:
        """Check if an object exists in storage."""
        return self.get_object_path(digest).is_file()

    def list_all_objects(self) -> list[str]:
        """
        List all object digests in the store.

        Scans all prefix directories. Files that do not form a valid
        digest (temp files, stray files) are skipped.
        """
        objects = []

        if not self.objects_dir.exists():
            return objects

        try:
            for prefix_dir in self.objects_dir.iterdir():
                if not prefix_dir.is_dir() or len(prefix_dir.name) != 2:
                    continue

                for obj_file in prefix_dir.iterdir():
                    candidate = prefix_dir.name + obj_file.name
                    if obj_file.is_file() and is_valid_hex_digest(candidate):
                        objects.append(candidate)

        except OSError as e:
            raise StorageError("list_objects", str(self.objects_dir), e)

        return sorted(objects)

    def get_storage_stats(self) -> dict:
        """
        Get storage statistics.

        Returns dict with:
        - total_objects: number of objects
        - total_size_bytes: total compressed size in bytes
        """
        stats = {
            'total_objects': 0,
            'total_size_bytes': 0,
        }

        for digest in self.list_all_objects():
            obj_path = self.get_object_path(digest)
            try:
                stats['total_size_bytes'] += obj_path.stat().st_size
            except OSError as e:
                raise StorageError("stat", str(obj_path), e)
            stats['total_objects'] += 1

        return stats
