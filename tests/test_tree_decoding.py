"""
Test tree decoding.

Verifies the entry framing and its failure modes.
"""

import pytest
import tempfile

from loose_store import (
    LooseStoreEngine,
    Tree,
    TreeEntry,
    decode_tree,
    MalformedTreeError,
    UnexpectedObjectKindError,
)


ZERO_HASH = b"\x00" * 20
FF_HASH = b"\xff" * 20


def make_entry(mode: bytes, name: bytes, digest: bytes) -> bytes:
    return mode + b" " + name + b"\x00" + digest


class TestDecodeTree:
    """Test the cursor-based tree parser."""

    def test_two_entries_in_encoded_order(self):
        """File then directory, returned as written."""
        content = (
            make_entry(b"100644", b"a.txt", ZERO_HASH)
            + make_entry(b"40000", b"dir", FF_HASH)
        )

        assert decode_tree(content) == [
            TreeEntry("a.txt", ZERO_HASH),
            TreeEntry("dir", FF_HASH),
        ]

    def test_empty_tree(self):
        """An empty body has no entries."""
        assert decode_tree(b"") == []

    def test_order_is_not_normalized(self):
        """Unsorted and duplicate entries are kept as-is."""
        content = (
            make_entry(b"100644", b"z", ZERO_HASH)
            + make_entry(b"100644", b"a", FF_HASH)
            + make_entry(b"100644", b"a", FF_HASH)
        )

        assert [e.name for e in decode_tree(content)] == ["z", "a", "a"]

    def test_digest_may_contain_separator_bytes(self):
        """Digest bytes are taken by length, not by scanning."""
        digest = b" \x00" * 10
        content = make_entry(b"100644", b"odd", digest) + make_entry(b"100644", b"next", ZERO_HASH)

        entries = decode_tree(content)

        assert entries[0].digest == digest
        assert entries[1].name == "next"

    def test_name_with_spaces_and_unicode(self):
        """Names run from the first space after the mode up to the NUL."""
        name = "my file ü.txt"
        content = make_entry(b"100644", name.encode("utf-8"), ZERO_HASH)

        assert decode_tree(content)[0].name == name

    def test_hexdigest(self):
        """Entries expose their digest in hex."""
        entry = TreeEntry("dir", FF_HASH)
        assert entry.hexdigest == "f" * 40

    def test_truncated_digest(self):
        """Five bytes after the NUL is not a digest."""
        content = make_entry(b"100644", b"a.txt", b"\x01" * 5)

        with pytest.raises(MalformedTreeError) as exc_info:
            decode_tree(content)

        assert exc_info.value.offset == len(b"100644 a.txt\x00")

    def test_truncated_second_entry(self):
        """A complete entry followed by a broken one still fails."""
        content = make_entry(b"100644", b"a.txt", ZERO_HASH) + b"100644 b"

        with pytest.raises(MalformedTreeError):
            decode_tree(content)

    def test_missing_space(self):
        """A mode with no following space is malformed."""
        with pytest.raises(MalformedTreeError):
            decode_tree(b"100644")

    def test_missing_nul(self):
        """A name with no following NUL is malformed."""
        with pytest.raises(MalformedTreeError):
            decode_tree(b"100644 a.txt")

    def test_non_utf8_name_is_preserved(self):
        """Names that are not UTF-8 decode without loss."""
        content = make_entry(b"100644", b"caf\xe9.txt", ZERO_HASH) + make_entry(b"100644", b"b", FF_HASH)

        entries = decode_tree(content)

        assert entries[0].name.encode("utf-8", "surrogateescape") == b"caf\xe9.txt"
        assert entries[0].digest == ZERO_HASH
        assert entries[1] == TreeEntry("b", FF_HASH)


class TestTreeObjects:
    """Test trees read from the store."""

    @pytest.fixture
    def store(self):
        """Create a temporary store for testing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            engine = LooseStoreEngine(tmpdir)
            engine.initialize()
            yield engine

    def test_list_tree_from_store(self, store):
        """Stored tree bodies decode to their entries."""
        blob = store.put_blob(b"hello world\n")
        content = make_entry(b"100644", b"hello.txt", bytes.fromhex(blob))
        tree_hash = store.hash_object(content, kind="tree", write=True)

        entries = store.list_tree(tree_hash)

        assert entries == [TreeEntry("hello.txt", bytes.fromhex(blob))]
        assert store.cat_file(entries[0].digest) == b"hello world\n"

    def test_get_tree_model(self, store):
        """Tree model hashes back to its own name."""
        content = make_entry(b"40000", b"dir", FF_HASH)
        tree_hash = store.hash_object(content, kind="tree", write=True)

        tree = store.get_tree(tree_hash)

        assert isinstance(tree, Tree)
        assert tree.names() == ["dir"]
        assert len(tree) == 1
        assert tree.compute_hash() == tree_hash

    def test_list_tree_of_blob(self, store):
        """Listing a blob is a kind error."""
        blob = store.put_blob(b"not a tree")

        with pytest.raises(UnexpectedObjectKindError) as exc_info:
            store.list_tree(blob)

        assert exc_info.value.actual == "blob"
        assert exc_info.value.expected == "tree"
