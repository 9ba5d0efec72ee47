"""
Canonical object encoding.

Every object is framed as ``<kind> <size>\\0<content>``. The same bytes are
hashed and compressed for storage, so the framing must be exact.
"""

from typing import Tuple


KIND_SEPARATOR = b' '
HEADER_TERMINATOR = b'\x00'


def encode_object(kind: str, content: bytes) -> bytes:
    """
    Encode an object to its canonical byte sequence.

    Rules:
    - kind name, ASCII
    - single space
    - decimal length of content
    - single NUL byte
    - raw content, no trailer

    Any content is valid, including empty.
    """
    header = kind.encode('ascii') + KIND_SEPARATOR + str(len(content)).encode('ascii')
    return header + HEADER_TERMINATOR + content


def parse_header(data: bytes) -> Tuple[str, int, bytes]:
    """
    Split decoded object bytes into kind, declared size and body.

    The declared size is returned as-is; it is not compared with the body.

    Raises ValueError if the header is malformed.
    """
    nul = data.find(HEADER_TERMINATOR)
    if nul == -1:
        raise ValueError("missing NUL after object header")

    header = data[:nul]
    space = header.find(KIND_SEPARATOR)
    if space == -1:
        raise ValueError(f"missing space in object header {header!r}")

    kind_field = header[:space]
    size_field = header[space + 1:]

    if not kind_field:
        raise ValueError("empty object kind")

    # bytes.isdigit only accepts ASCII digits
    if not size_field.isdigit():
        raise ValueError(f"non-numeric object size {size_field!r}")

    try:
        kind = kind_field.decode('ascii')
    except UnicodeDecodeError:
        raise ValueError(f"non-ASCII object kind {kind_field!r}")

    return kind, int(size_field), data[nul + 1:]
