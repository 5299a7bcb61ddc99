"""Command line entry point: index files and run term queries."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from application.use_cases.index_paths import index_paths
from application.use_cases.search import chain, ranked, search
from domain.errors import IndexUnavailable, ReadOnlyIndex
from infrastructure.config import ContainerConfig, build_default_container
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def _step(operator: str):
    def parse(term: str) -> tuple[str, str]:
        return operator, term

    return parse


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termsearch", description=__doc__)
    parser.add_argument(
        "--backend",
        choices=("memory", "sqlite", "redis", "http"),
        default=os.getenv("TERMSEARCH_INDEX_BACKEND", "sqlite"),
        help="Term index backend (default: sqlite, or $TERMSEARCH_INDEX_BACKEND).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $TERMSEARCH_LOG_LEVEL or INFO).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="Index .txt, .md and .html files.")
    index_parser.add_argument("paths", nargs="+", type=Path)

    search_parser = subparsers.add_parser(
        "search",
        help="Look up a term and combine it with further terms, left to right.",
    )
    search_parser.add_argument("term")
    for operator in ("and", "or", "minus"):
        search_parser.add_argument(
            f"--{operator}",
            dest="steps",
            action="append",
            type=_step(operator),
            default=[],
            metavar="TERM",
            help=f"Combine the result so far with TERM using {operator.upper()}.",
        )
    search_parser.add_argument(
        "--desc",
        action="store_true",
        help="Print the strongest match first instead of last.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=args.log_level)
    config = ContainerConfig.from_env()
    config.index_backend = args.backend
    try:
        container = build_default_container(config)
        if args.command == "index":
            report = index_paths(args.paths, term_index=container.term_index)
            print(f"indexed {report.indexed}/{report.total}")
            for error in report.errors:
                print(f"error: {error.path}: {error.reason}", file=sys.stderr)
            return 0

        query = chain(args.term, args.steps)
        result = search(query, term_index=container.term_index)
        for document_id, score in ranked(result, order="desc" if args.desc else "asc"):
            print(f"{document_id}\t{score}")
        return 0
    except ReadOnlyIndex as exc:
        logger.error("%s; index with a writable backend instead.", exc)
        return 2
    except IndexUnavailable as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
