"""
Index Routes

Filesystem-facing endpoints: list the workspace, read one file, and run a
scan + classify + preview pass (optionally applying the incremental
indexer). The scan root is always the configured workspace; request paths
are resolved against it and may not escape it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Query

from ...config import Settings, get_settings
from ...errors import NotFoundError
from ...indexer import IncrementalIndexer
from ...scanners import WorkspaceScanner
from ...utils.classifier import classify
from ...utils.text import count_lines, read_text
from ..dependencies import get_indexer
from ..models import ReindexRequest

router = APIRouter(prefix="/index", tags=["index"])


def resolve_workspace_path(root: Path, relative: str) -> Path:
    """Resolve a request path inside the workspace, or raise NotFoundError."""
    base = root.resolve()
    target = (base / relative).resolve()
    if not target.is_relative_to(base) or not target.is_file():
        raise NotFoundError(f"File not found: {relative}")
    return target


def _scan(root: Path):
    scanner = WorkspaceScanner()
    if not scanner.can_handle(root):
        raise NotFoundError(f"Workspace not found: {root}")
    return scanner.scan(root)


@router.get("")
def list_index(
    settings: Annotated[Settings, Depends(get_settings)],
    content: bool = Query(False),
    path: Optional[str] = Query(None),
) -> dict:
    """
    Return one file's content when ``path`` is given, otherwise the scan
    listing of every indexable file (with content when ``content=true``).
    """
    root = settings.workspace_path

    if path:
        target = resolve_workspace_path(root, path)
        return {"success": True, "path": path, "content": read_text(target)}

    files = []
    for entry in _scan(root):
        item = {
            "path": entry.path,
            "name": entry.name,
            "type": entry.type,
            "size": entry.size,
            "modified": entry.modified.isoformat(),
        }
        if content:
            item["content"] = read_text(root / entry.path)
        files.append(item)

    return {"success": True, "files": files, "count": len(files)}


@router.post("")
def refresh_index(
    settings: Annotated[Settings, Depends(get_settings)],
    indexer: Annotated[IncrementalIndexer, Depends(get_indexer)],
    req: Annotated[Optional[ReindexRequest], Body()] = None,
) -> dict:
    """
    Scan, classify and preview every indexable file.

    With ``apply=true`` the incremental indexer also runs and its counters
    are returned under ``result``.
    """
    req = req or ReindexRequest()
    root = settings.workspace_path

    files = []
    for entry in _scan(root):
        text = read_text(root / entry.path)
        files.append(
            {
                "path": entry.path,
                "name": entry.name,
                "type": entry.type,
                "sourceType": classify(entry.path),
                "size": entry.size,
                "lineCount": count_lines(text),
                "preview": text[: settings.preview_chars],
            }
        )

    response = {
        "success": True,
        "message": "Full reindex completed" if req.full_reindex else "Index refreshed",
        "files": files,
        "count": len(files),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if req.apply:
        response["result"] = indexer.reindex(root, full=req.full_reindex).to_dict()

    return response
