"""Use case for adding documents to the term index."""
from __future__ import annotations

import logging
from typing import Iterable

from application.services.term_counter import count_terms
from domain.entities import Document
from domain.interfaces import TermIndex, TextExtractor

logger = logging.getLogger(__name__)


def index_documents(
    sources: Iterable[tuple[str, bytes | str]],
    *,
    extractor: TextExtractor,
    term_index: TermIndex,
) -> list[Document]:
    """Index a sequence of sources identified by their ids."""

    indexed_documents: list[Document] = []
    for document_id, source in sources:
        text = extractor.extract(source)
        document = Document(id=document_id, content=text)
        counts = count_terms(text)
        term_index.add_counts(document.id, counts)
        logger.debug("Indexed %s with %d distinct terms.", document.id, len(counts))
        indexed_documents.append(document)

    return indexed_documents


__all__ = ["index_documents"]
