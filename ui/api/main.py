"""FastAPI layer that exposes index/search operations."""
from __future__ import annotations

import logging
from typing import Literal, Union

from fastapi import FastAPI, Query as FastAPIQuery, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from application.use_cases.index_documents import index_documents
from application.use_cases.search import CombinedQuery, QueryNode, TermQuery, ranked, search
from domain.errors import IndexUnavailable, ReadOnlyIndex
from infrastructure.config import ContainerConfig, build_default_container
from ui.logging_utils import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="TermSearch API")
container = build_default_container(ContainerConfig.from_env())


class DocumentPayload(BaseModel):
    id: str
    content: str
    content_type: Literal["text", "html"] = "text"


class IndexRequest(BaseModel):
    documents: list[DocumentPayload]


class IndexResponse(BaseModel):
    indexed: int


class TermNode(BaseModel):
    term: str


class CombinedNode(BaseModel):
    operator: Literal["and", "or", "minus"]
    left: Union[TermNode, CombinedNode]
    right: Union[TermNode, CombinedNode]


CombinedNode.model_rebuild()


class SearchRequest(BaseModel):
    query: Union[TermNode, CombinedNode]
    order: Literal["asc", "desc"] = "asc"


class RankedEntry(BaseModel):
    document_id: str
    score: int


class SearchResponse(BaseModel):
    results: list[RankedEntry]


class PostingsResponse(BaseModel):
    term: str
    postings: dict[str, int]


class TermsResponse(BaseModel):
    terms: list[str]


class DocumentStatusResponse(BaseModel):
    document_id: str
    indexed: bool


def _to_query(node: TermNode | CombinedNode) -> QueryNode:
    if isinstance(node, TermNode):
        return TermQuery(node.term)
    return CombinedQuery(operator=node.operator, left=_to_query(node.left), right=_to_query(node.right))


@app.exception_handler(IndexUnavailable)
async def index_unavailable_handler(request: Request, exc: IndexUnavailable) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc), "backend": exc.backend})


@app.exception_handler(ReadOnlyIndex)
async def read_only_index_handler(request: Request, exc: ReadOnlyIndex) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=405, content={"detail": str(exc), "backend": exc.backend})


@app.post("/documents", response_model=IndexResponse)
def index_endpoint(payload: IndexRequest) -> IndexResponse:
    indexed = 0
    for content_type in ("text", "html"):
        sources = [(doc.id, doc.content) for doc in payload.documents if doc.content_type == content_type]
        if not sources:
            continue
        extractor = container.html_extractor if content_type == "html" else container.text_extractor
        indexed += len(index_documents(sources, extractor=extractor, term_index=container.term_index))
    return IndexResponse(indexed=indexed)


@app.get("/documents/status", response_model=DocumentStatusResponse)
def document_status_endpoint(document_id: str = FastAPIQuery(..., description="Document id")) -> DocumentStatusResponse:
    return DocumentStatusResponse(document_id=document_id, indexed=container.term_index.is_indexed(document_id))


@app.get("/terms", response_model=TermsResponse)
def terms_endpoint() -> TermsResponse:
    return TermsResponse(terms=sorted(container.term_index.terms()))


@app.get("/terms/{term}", response_model=PostingsResponse)
def postings_endpoint(term: str) -> PostingsResponse:
    return PostingsResponse(term=term, postings=container.term_index.lookup(term))


@app.post("/search", response_model=SearchResponse)
def search_endpoint(payload: SearchRequest) -> SearchResponse:
    result = search(_to_query(payload.query), term_index=container.term_index)
    entries = ranked(result, order=payload.order)
    return SearchResponse(results=[RankedEntry(document_id=doc_id, score=score) for doc_id, score in entries])
