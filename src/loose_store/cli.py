"""
Command-line front end.

Parses arguments, calls the engine and turns errors into exit codes.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .engine import LooseStoreEngine
from .errors import LooseStoreError
from .model.blob import BLOB_KIND
from .model.tree import NAME_DECODE_ERRORS, TREE_KIND


logger = logging.getLogger(__name__)

DEFAULT_GIT_DIR = '.git'


def cmd_init(engine: LooseStoreEngine, args) -> int:
    engine.initialize()
    print("Initialized git directory")
    return 0


def cmd_hash_object(engine: LooseStoreEngine, args) -> int:
    digest = engine.hash_file(args.file, kind=args.type, write=args.write)
    print(digest)
    return 0


def cmd_cat_file(engine: LooseStoreEngine, args) -> int:
    if args.type:
        print(engine.object_kind(args.object))
    elif args.size:
        print(engine.object_size(args.object))
    else:
        _write_bytes(engine.cat_file(args.object))
    return 0


def cmd_ls_tree(engine: LooseStoreEngine, args) -> int:
    lines = []
    for entry in engine.list_tree(args.tree):
        if args.name_only:
            line = entry.name
        else:
            line = f"{entry.hexdigest}\t{entry.name}"
        # names keep their stored bytes, even when not valid UTF-8
        lines.append(line.encode('utf-8', NAME_DECODE_ERRORS) + b"\n")
    _write_bytes(b"".join(lines))
    return 0


def _write_bytes(data: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loose-store",
        description="Inspect and write git loose objects.",
    )
    parser.add_argument(
        "--git-dir",
        default=DEFAULT_GIT_DIR,
        help=f"Repository directory (default: {DEFAULT_GIT_DIR}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: init
    init_parser = subparsers.add_parser("init", help="Create an empty repository.")
    init_parser.set_defaults(func=cmd_init)

    # Command: hash-object
    hash_parser = subparsers.add_parser("hash-object", help="Compute an object ID from a file.")
    hash_parser.add_argument("-w", dest="write", action="store_true", help="Write the object into the store.")
    hash_parser.add_argument(
        "-t",
        dest="type",
        default=BLOB_KIND,
        choices=[BLOB_KIND, TREE_KIND],
        help="Object kind (default: blob).",
    )
    hash_parser.add_argument("file", help="File to hash.")
    hash_parser.set_defaults(func=cmd_hash_object)

    # Command: cat-file
    cat_parser = subparsers.add_parser("cat-file", help="Show object content, kind or size.")
    mode = cat_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-p", dest="pretty", action="store_true", help="Print the object content.")
    mode.add_argument("-t", dest="type", action="store_true", help="Print the object kind.")
    mode.add_argument("-s", dest="size", action="store_true", help="Print the object size.")
    cat_parser.add_argument("object", help="Object ID.")
    cat_parser.set_defaults(func=cmd_cat_file)

    # Command: ls-tree
    ls_parser = subparsers.add_parser("ls-tree", help="List the entries of a tree object.")
    ls_parser.add_argument("--name-only", action="store_true", help="Print only entry names.")
    ls_parser.add_argument("tree", help="Tree object ID.")
    ls_parser.set_defaults(func=cmd_ls_tree)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    engine = LooseStoreEngine(args.git_dir)
    try:
        return args.func(engine, args)
    except (LooseStoreError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"fatal: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
