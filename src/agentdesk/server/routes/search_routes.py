"""
Search Routes

Full-text search over indexed workspace chunks plus the index maintenance
endpoints the dashboard uses (stats, file listing, manual entries,
clearing a file).
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from ...models import SearchFilters
from ...search import SearchService
from ...stats import compute_index_stats
from ..dependencies import get_search_service
from ..models import EntryCreate

router = APIRouter(prefix="/search", tags=["search"])

SearchDep = Annotated[SearchService, Depends(get_search_service)]


def _filters(
    file_type: Optional[str] = Query(None, alias="fileType"),
    source_type: Optional[str] = Query(None, alias="sourceType"),
    content_type: Optional[str] = Query(None, alias="contentType"),
) -> SearchFilters:
    return SearchFilters(
        file_type=file_type,
        source_type=source_type,
        content_type=content_type,
    )


@router.get("")
def search(
    service: SearchDep,
    filters: Annotated[SearchFilters, Depends(_filters)],
    q: str = Query(""),
    limit: Optional[int] = Query(None, ge=1, le=200),
) -> dict:
    """Ranked chunks matching ``q`` and every supplied filter."""
    results = service.search(q, limit=limit, filters=filters)
    return {
        "query": q,
        "results": [chunk.to_dict() for chunk in results],
        "count": len(results),
    }


@router.get("/context")
def search_with_context(
    service: SearchDep,
    filters: Annotated[SearchFilters, Depends(_filters)],
    q: str = Query(""),
    limit: int = Query(10, ge=1, le=200),
) -> dict:
    results = service.search_with_context(q, limit=limit, filters=filters)
    return {"query": q, "results": results, "count": len(results)}


@router.get("/stats")
def index_stats(service: SearchDep) -> dict:
    return compute_index_stats(service.store).to_dict()


@router.get("/files")
def indexed_files(
    service: SearchDep,
    entries: bool = Query(False),
) -> dict:
    files = []
    for indexed in service.indexed_files(include_entries=entries):
        item = {
            "filePath": indexed.file_path,
            "fileType": indexed.file_type,
            "sourceType": indexed.source_type,
            "lastIndexed": indexed.last_indexed,
            "chunkCount": indexed.chunk_count,
        }
        if entries:
            item["entries"] = [chunk.to_dict() for chunk in indexed.entries]
        files.append(item)
    return {"files": files, "count": len(files)}


@router.get("/recent")
def recent(service: SearchDep, limit: int = Query(20, ge=1, le=200)) -> dict:
    items = service.recent(limit)
    return {"results": [chunk.to_dict() for chunk in items], "count": len(items)}


@router.post("/entries", status_code=status.HTTP_201_CREATED)
def add_entry(service: SearchDep, req: EntryCreate) -> dict:
    entry_id = service.add_entry(
        content=req.content,
        title=req.title,
        file_path=req.file_path,
        file_type=req.file_type,
        source_type=req.source_type,
        content_type=req.content_type,
        line_number=req.line_number,
        context=req.context,
    )
    return {"success": True, "id": entry_id}


@router.delete("/files")
def clear_file(service: SearchDep, path: str = Query(..., min_length=1)) -> dict:
    removed = service.clear_file(path)
    return {"success": True, "path": path, "removed": removed}
