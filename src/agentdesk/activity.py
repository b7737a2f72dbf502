"""Append-only activity feed with cursor pagination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from agentdesk.errors import ValidationError
from agentdesk.models import ActivityRecord
from agentdesk.models.activity import ACTIVITY_STATUSES
from agentdesk.storage import WorkspaceStore, now_ms

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


@dataclass
class ActivityStats:
    """Counters over the trailing 24 hours."""

    total_24h: int
    success_24h: int
    failed_24h: int
    last_activity: Optional[ActivityRecord]

    def to_dict(self) -> dict:
        return {
            "total24h": self.total_24h,
            "success24h": self.success_24h,
            "failed24h": self.failed_24h,
            "lastActivity": self.last_activity.to_dict() if self.last_activity else None,
        }


class ActivityFeed:
    """Writes and pages through the activity log.

    Timestamps come from the feed's clock, never from callers. Readers
    poll; the feed keeps no state between calls.
    """

    def __init__(
        self,
        store: WorkspaceStore,
        clock: Callable[[], int] = now_ms,
        page_size: int = 50,
    ):
        self.store = store
        self.clock = clock
        self.page_size = page_size

    def log(
        self,
        action_type: str,
        description: str,
        status: str,
        metadata: Optional[dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> ActivityRecord:
        """Append an activity stamped with the current time."""
        if not action_type or not action_type.strip():
            raise ValidationError("actionType is required")
        if not description or not description.strip():
            raise ValidationError("description is required")
        if status not in ACTIVITY_STATUSES:
            raise ValidationError(
                f"status must be one of {', '.join(ACTIVITY_STATUSES)}, got {status!r}"
            )

        return self.store.insert_activity(
            timestamp=self.clock(),
            action_type=action_type,
            description=description,
            status=status,
            metadata=metadata,
            source=source or "agent",
        )

    def list(
        self,
        limit: Optional[int] = None,
        cursor: Optional[int] = None,
        action_type: Optional[str] = None,
    ) -> list[ActivityRecord]:
        """One page of activities, newest first.

        Pass the oldest timestamp of the previous page as ``cursor`` to get
        the next page; records at or after the cursor are excluded.
        """
        limit = self.page_size if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        return self.store.query_activities(limit, before=cursor, action_type=action_type)

    def list_by_range(self, start: int, end: int, descending: bool = True) -> list[ActivityRecord]:
        """Every activity with start <= timestamp <= end."""
        if end < start:
            raise ValidationError("end must not be earlier than start")
        return self.store.activities_between(start, end, descending=descending)

    def stats(self) -> ActivityStats:
        recent = self.store.activities_between(self.clock() - DAY_MS, descending=True)
        return ActivityStats(
            total_24h=len(recent),
            success_24h=sum(1 for a in recent if a.status == "success"),
            failed_24h=sum(1 for a in recent if a.status == "failed"),
            last_activity=recent[0] if recent else None,
        )
