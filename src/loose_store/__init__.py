from .engine import LooseStoreEngine
from .model.blob import Blob
from .model.tree import Tree, TreeEntry, decode_tree
from .integrity.canonical import encode_object
from .integrity.hashing import compute_digest, compute_object_hash
from .storage.layout import StorageLayout
from .storage.object_store import ObjectStore
from .errors import (
    LooseStoreError,
    InvalidDigestError,
    ObjectNotFoundError,
    CorruptObjectError,
    MalformedTreeError,
    UnexpectedObjectKindError,
    StorageError,
)

__all__ = [
    'LooseStoreEngine',
    'ObjectStore',
    'StorageLayout',
    'Blob',
    'Tree',
    'TreeEntry',
    'decode_tree',
    'encode_object',
    'compute_digest',
    'compute_object_hash',
    'LooseStoreError',
    'InvalidDigestError',
    'ObjectNotFoundError',
    'CorruptObjectError',
    'MalformedTreeError',
    'UnexpectedObjectKindError',
    'StorageError',
]
