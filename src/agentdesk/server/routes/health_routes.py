"""
Health and Overview Routes
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ...stats import compute_dashboard_stats
from ...storage import WorkspaceStore
from ..dependencies import get_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/stats")
def dashboard_stats(store: Annotated[WorkspaceStore, Depends(get_store)]) -> dict:
    """Headline counters for the dashboard overview."""
    return compute_dashboard_stats(store).to_dict()
