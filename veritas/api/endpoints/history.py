"""Saved report endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...domain.models.history import HistoryItem
from ...domain.services.citation_service import CitationFormat, build_report, format_citation
from ...domain.services.history_service import HistoryService
from ...infrastructure.dependencies import get_history_service
from ..identity import get_identity

router = APIRouter(prefix="/history", tags=["history"])


class CitationsResponse(BaseModel):
    """Bibliography of a saved report."""

    format: CitationFormat
    citations: List[str]
    text: str


def _find_item(history: HistoryService, identity: str, item_id: str) -> HistoryItem:
    item = history.get(identity, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Report not found: {item_id}")
    return item


@router.get("", response_model=List[HistoryItem])
async def list_history(
    identity: str = Depends(get_identity),
    history: HistoryService = Depends(get_history_service),
) -> List[HistoryItem]:
    """List the caller's saved reports, newest first."""
    return history.list(identity)


@router.delete("", status_code=204)
async def clear_history(
    identity: str = Depends(get_identity),
    history: HistoryService = Depends(get_history_service),
) -> Response:
    """Wipe the caller's saved reports."""
    history.clear(identity)
    return Response(status_code=204)


@router.get("/{item_id}", response_model=HistoryItem)
async def get_history_item(
    item_id: str,
    identity: str = Depends(get_identity),
    history: HistoryService = Depends(get_history_service),
) -> HistoryItem:
    """Get one saved report."""
    return _find_item(history, identity, item_id)


@router.get("/{item_id}/citations", response_model=CitationsResponse)
async def get_citations(
    item_id: str,
    format: CitationFormat = CitationFormat.PLAIN,
    identity: str = Depends(get_identity),
    history: HistoryService = Depends(get_history_service),
) -> CitationsResponse:
    """Format the bibliography of a saved report."""
    item = _find_item(history, identity, item_id)
    citations = [format_citation(source, i, format) for i, source in enumerate(item.result.sources)]
    return CitationsResponse(format=format, citations=citations, text="\n".join(citations))


@router.get("/{item_id}/report", response_class=PlainTextResponse)
async def get_report(
    item_id: str,
    identity: str = Depends(get_identity),
    history: HistoryService = Depends(get_history_service),
) -> str:
    """Render the full plain-text report of a saved item."""
    item = _find_item(history, identity, item_id)
    return build_report(item.result)
