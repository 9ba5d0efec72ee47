"""
Tree object model.

A tree body is a run of entries, each framed as
``<mode> <name>\\0<20 raw digest bytes>``.
"""

from typing import List, NamedTuple

from ..errors import MalformedTreeError
from ..integrity.hashing import DIGEST_SIZE, compute_object_hash


TREE_KIND = 'tree'
# Non-UTF-8 bytes in names map to lone surrogates and encode back unchanged.
NAME_DECODE_ERRORS = 'surrogateescape'


class TreeEntry(NamedTuple):
    """A single tree entry: child name and raw child digest."""

    name: str
    digest: bytes

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


def decode_tree(content: bytes) -> List[TreeEntry]:
    """
    Parse a tree body into entries, in encoded order.

    `content` is the body after the object header has been removed.
    The mode is skipped; entries are not checked for order or duplicates.
    Names that are not valid UTF-8 are kept with surrogateescape, so
    `name.encode("utf-8", "surrogateescape")` gives back the stored bytes.

    Raises MalformedTreeError if the framing is broken.
    """
    entries = []
    cursor = 0
    end = len(content)

    while cursor < end:
        space = content.find(b' ', cursor)
        if space == -1:
            raise MalformedTreeError("missing space after mode", cursor)

        nul = content.find(b'\x00', space + 1)
        if nul == -1:
            raise MalformedTreeError("missing NUL after name", space + 1)

        digest_start = nul + 1
        digest_end = digest_start + DIGEST_SIZE
        if digest_end > end:
            raise MalformedTreeError(
                f"expected {DIGEST_SIZE} digest bytes, found {end - digest_start}",
                digest_start,
            )

        name = content[space + 1:nul].decode('utf-8', NAME_DECODE_ERRORS)
        entries.append(TreeEntry(name, content[digest_start:digest_end]))
        cursor = digest_end

    return entries


class Tree:
    """
    Immutable, read-only view of a decoded tree object.

    Trees are never written by this package; they are only decoded.
    """

    def __init__(self, content: bytes, entries: List[TreeEntry]):
        self.content = content
        self.entries = list(entries)

    @classmethod
    def from_content(cls, content: bytes) -> 'Tree':
        """
        Decode a tree from its body.

        Raises MalformedTreeError if the body is invalid.
        """
        return cls(content, decode_tree(content))

    def compute_hash(self) -> str:
        """Compute content hash of this tree."""
        return compute_object_hash(TREE_KIND, self.content)

    def names(self) -> List[str]:
        """Get entry names in encoded order."""
        return [entry.name for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __repr__(self) -> str:
        hash_preview = self.compute_hash()[:8]
        return f"Tree(entries={len(self.entries)}, hash={hash_preview}...)"
