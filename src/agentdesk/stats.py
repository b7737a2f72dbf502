"""Aggregate statistics over the index and the dashboard records."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from agentdesk.storage import WorkspaceStore


@dataclass
class IndexStats:
    """Point-in-time snapshot of the index contents."""

    total_indexed: int = 0
    by_file_type: dict[str, int] = field(default_factory=dict)
    by_source_type: dict[str, int] = field(default_factory=dict)
    last_index_time: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "totalIndexed": self.total_indexed,
            "byFileType": self.by_file_type,
            "bySourceType": self.by_source_type,
            "lastIndexTime": self.last_index_time,
        }


@dataclass
class DashboardStats:
    """Headline counters for the dashboard overview."""

    total_activities: int
    todays_activities: int
    total_tasks: int
    active_tasks: int
    total_search_items: int

    def to_dict(self) -> dict:
        return {
            "totalActivities": self.total_activities,
            "todaysActivities": self.todays_activities,
            "totalTasks": self.total_tasks,
            "activeTasks": self.active_tasks,
            "totalSearchItems": self.total_search_items,
        }


def compute_index_stats(store: WorkspaceStore) -> IndexStats:
    """Group-count every chunk by file type and source type.

    Recomputed from a full pass on each call.
    """
    rows = store.chunk_facets()
    if not rows:
        return IndexStats()

    return IndexStats(
        total_indexed=len(rows),
        by_file_type=dict(Counter(row["file_type"] for row in rows)),
        by_source_type=dict(Counter(row["source_type"] for row in rows)),
        last_index_time=max(row["last_indexed"] for row in rows),
    )


def compute_dashboard_stats(store: WorkspaceStore, now: Optional[datetime] = None) -> DashboardStats:
    """Counters for activities, tasks and index size.

    "Today" starts at local midnight of ``now``.
    """
    now = now or datetime.now().astimezone()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    return DashboardStats(
        total_activities=store.count_activities(),
        todays_activities=store.count_activities(since=int(midnight.timestamp() * 1000)),
        total_tasks=store.count_tasks(),
        active_tasks=store.count_tasks(status="active"),
        total_search_items=store.count_chunks(),
    )
