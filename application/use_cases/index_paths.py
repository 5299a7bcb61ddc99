"""Use case for indexing documents found on the file system."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from application.services.term_counter import count_terms
from domain.interfaces import TermIndex, TextExtractor
from infrastructure.text_extraction.html_extractor import HtmlExtractor
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexingError:
    path: str
    reason: str


@dataclass(slots=True)
class IndexReport:
    total: int
    indexed: int
    errors: list[IndexingError] = field(default_factory=list)


_EXTENSION_EXTRACTORS: dict[str, TextExtractor] = {
    ".txt": PlainTextExtractor(),
    ".md": PlainTextExtractor(),
    ".html": HtmlExtractor(),
    ".htm": HtmlExtractor(),
}


def index_paths(paths: Iterable[Path], *, term_index: TermIndex) -> IndexReport:
    """Index every supported file under the given files or directories.

    Documents are keyed by their resolved path. Explicit paths that are missing
    or of an unsupported type, and files that cannot be read, are reported
    instead of aborting the run; index failures still propagate.
    """

    files, rejected = _collect_files(paths)
    report = IndexReport(total=len(files) + len(rejected), indexed=0, errors=rejected)

    for path in files:
        extractor = _EXTENSION_EXTRACTORS[path.suffix.lower()]
        try:
            text = extractor.extract(path.read_bytes())
        except OSError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            report.errors.append(IndexingError(path=str(path), reason=str(exc)))
            continue

        term_index.add_counts(str(path.resolve()), count_terms(text))
        report.indexed += 1

    logger.info("Indexed %d of %d files.", report.indexed, report.total)
    return report


def _collect_files(paths: Iterable[Path]) -> tuple[list[Path], list[IndexingError]]:
    collected: list[Path] = []
    rejected: list[IndexingError] = []
    for path in paths:
        if path.is_dir():
            for file_path in sorted(path.rglob("*")):
                if file_path.is_file() and file_path.suffix.lower() in _EXTENSION_EXTRACTORS:
                    collected.append(file_path)
        elif not path.exists():
            logger.warning("Skipping %s: not found", path)
            rejected.append(IndexingError(path=str(path), reason="not found"))
        elif path.suffix.lower() not in _EXTENSION_EXTRACTORS:
            logger.warning("Skipping %s: unsupported type", path)
            rejected.append(IndexingError(path=str(path), reason="unsupported type"))
        else:
            collected.append(path)
    return collected, rejected


__all__ = ["index_paths", "IndexReport", "IndexingError"]
