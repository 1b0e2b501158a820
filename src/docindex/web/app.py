"""FastAPI application serving the documentation index."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docindex import __version__
from docindex.config import AppConfig
from docindex.index.cache import DocumentIndex, IndexUnavailableError
from docindex.index.search import Searcher
from docindex.models import DocumentNode

LOGGER = logging.getLogger(__name__)


class SearchPayload(BaseModel):
    query: str


def _serialize(nodes: List[DocumentNode]) -> List[dict[str, Any]]:
    return [node.to_dict() for node in nodes]


def _unavailable(exc: IndexUnavailableError) -> HTTPException:
    LOGGER.error("Documentation unavailable: %s", exc)
    return HTTPException(status_code=503, detail=f"Documentation unavailable: {exc}")


def _get_index(request: Request) -> DocumentIndex:
    return request.app.state.index


def create_app(index: DocumentIndex | None = None, config: AppConfig | None = None) -> FastAPI:
    """Create the web app owning ``index`` (built from ``config`` when omitted)."""
    if index is None:
        config = config or AppConfig()
        index = DocumentIndex.from_config(config, base_dir=Path.cwd())

    app = FastAPI(title="docindex", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.index = index

    @app.on_event("startup")
    async def startup_event() -> None:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    @app.get("/api/docs")
    async def list_documents(request: Request, search: str = "") -> List[dict[str, Any]]:
        """Full hierarchy, or the pruned hierarchy when ``search`` is given."""
        current = _get_index(request)
        try:
            if search.strip():
                nodes = await asyncio.to_thread(Searcher(current).search, search)
            else:
                nodes = await asyncio.to_thread(current.get_documents)
        except IndexUnavailableError as exc:
            raise _unavailable(exc) from exc
        return _serialize(nodes)

    @app.post("/search")
    async def search_documents(request: Request, payload: SearchPayload) -> dict[str, Any]:
        current = _get_index(request)
        try:
            nodes = await asyncio.to_thread(Searcher(current).search, payload.query)
        except IndexUnavailableError as exc:
            raise _unavailable(exc) from exc
        return {"results": _serialize(nodes)}

    @app.post("/api/docs/reload")
    async def reload_documents(request: Request) -> dict[str, Any]:
        current = _get_index(request)
        current.invalidate()
        return {"status": "ok", "state": current.state.value}

    @app.get("/api/docs/{doc_path:path}")
    async def get_document(request: Request, doc_path: str) -> dict[str, Any]:
        current = _get_index(request)
        try:
            node = await asyncio.to_thread(current.find, doc_path)
        except IndexUnavailableError as exc:
            raise _unavailable(exc) from exc
        if node is None:
            raise HTTPException(status_code=404, detail=f"Could not load {doc_path}")
        return node.to_dict()

    return app


app = create_app()
