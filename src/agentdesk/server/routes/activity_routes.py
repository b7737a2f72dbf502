"""
Activity Routes

The dashboard polls these endpoints (every ~10 seconds) for the feed,
time-range views and the rolling 24-hour counters.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from ...activity import ActivityFeed
from ..dependencies import get_activity_feed
from ..models import ActivityCreate

router = APIRouter(prefix="/activities", tags=["activities"])

FeedDep = Annotated[ActivityFeed, Depends(get_activity_feed)]


@router.get("")
def list_activities(
    feed: FeedDep,
    limit: Optional[int] = Query(None, ge=1, le=500),
    cursor: Optional[int] = Query(None, description="Only records older than this timestamp"),
    action_type: Optional[str] = Query(None, alias="actionType"),
) -> dict:
    """
    One page of activities, newest first. ``nextCursor`` is the oldest
    timestamp on the page, or null when the page came back short.
    """
    page_size = limit or feed.page_size
    records = feed.list(limit=page_size, cursor=cursor, action_type=action_type)
    next_cursor = records[-1].timestamp if len(records) == page_size else None
    return {
        "activities": [record.to_dict() for record in records],
        "count": len(records),
        "nextCursor": next_cursor,
    }


@router.get("/range")
def activities_by_range(
    feed: FeedDep,
    start: int = Query(...),
    end: int = Query(...),
    order: Literal["asc", "desc"] = Query("desc"),
) -> dict:
    records = feed.list_by_range(start, end, descending=order == "desc")
    return {"activities": [record.to_dict() for record in records], "count": len(records)}


@router.get("/stats")
def activity_stats(feed: FeedDep) -> dict:
    return feed.stats().to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
def log_activity(feed: FeedDep, req: ActivityCreate) -> dict:
    record = feed.log(
        action_type=req.action_type,
        description=req.description,
        status=req.status,
        metadata=req.metadata,
        source=req.source,
    )
    return {"success": True, "activity": record.to_dict()}
