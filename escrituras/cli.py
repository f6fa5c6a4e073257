# escrituras/cli.py
"""
Command line access to the citation engine.

Usage:
    escrituras id "Génesis 1:1" "1 Nefi 2:15"
    escrituras expand "Juan 1:1-3, 14"
    escrituras ids "Alma 32:21-23; DyC 76:22"
    escrituras books --volume BM
"""

import argparse
import logging
import sys

from . import config
from .catalog import Volume
from .errors import CatalogError, CitationError
from .service import get_service


def cmd_id(args) -> int:
    service = get_service()
    status = 0
    for citation in args.citations:
        try:
            if args.compact:
                print(service.compact_vector_id(citation))
            else:
                print(service.vector_id(citation))
        except CitationError as e:
            print(f"✗ {citation}: {e}", file=sys.stderr)
            status = 1
    return status


def _print_errors(errors) -> None:
    for segment, error in errors:
        print(f"✗ {segment}: {error}", file=sys.stderr)


def cmd_expand(args) -> int:
    result = get_service().expand_passage(args.passage)
    for citation in result.citations:
        print(citation)
    _print_errors(result.errors)
    return 0 if result.ok else 1


def cmd_ids(args) -> int:
    ids, errors = get_service().passage_vector_ids(args.passage)
    for vector_id in ids:
        print(vector_id)
    _print_errors(errors)
    return 0 if not errors else 1


def cmd_books(args) -> int:
    catalog = get_service().catalog
    entries = list(catalog)
    if args.volume:
        entries = catalog.by_volume(Volume.from_code(args.volume))

    for entry in entries:
        print(f"{entry.volume.prefix:<4} {entry.slug:<24} {entry.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="escrituras",
        description="Resolve scripture citations to vector store identifiers",
    )
    parser.add_argument(
        "--log-level", default=config.LOG_LEVEL,
        help="Logging level (default: ESCRITURAS_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("id", help="Identifier for each citation")
    p.add_argument("citations", nargs="+")
    p.add_argument(
        "--compact", action="store_true",
        help="Keep section verse ranges as a suffix",
    )
    p.set_defaults(func=cmd_id)

    p = sub.add_parser("expand", help="Expand a passage into single citations")
    p.add_argument("passage")
    p.set_defaults(func=cmd_expand)

    p = sub.add_parser("ids", help="Identifiers for every verse of a passage")
    p.add_argument("passage")
    p.set_defaults(func=cmd_ids)

    p = sub.add_parser("books", help="List catalog entries")
    p.add_argument(
        "--volume", choices=[code for v in Volume for code in (v.name, v.value)],
        help="Only books of this volume",
    )
    p.set_defaults(func=cmd_books)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except CatalogError as e:
        print(f"Book catalog error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
