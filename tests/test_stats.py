from datetime import datetime, timedelta

from agentdesk.models import IndexedChunk
from agentdesk.stats import compute_dashboard_stats, compute_index_stats


def _chunk(file_path, file_type, source_type):
    return IndexedChunk(
        content=f"content of {file_path}",
        title=file_path,
        file_path=file_path,
        file_type=file_type,
        source_type=source_type,
    )


def test_empty_index(store):
    stats = compute_index_stats(store)

    assert stats.total_indexed == 0
    assert stats.last_index_time is None
    assert stats.to_dict() == {
        "totalIndexed": 0,
        "byFileType": {},
        "bySourceType": {},
        "lastIndexTime": None,
    }


def test_groups_by_file_and_source_type(store, clock):
    store.replace_file_chunks(
        "MEMORY.md",
        [_chunk("MEMORY.md", "md", "memory"), _chunk("MEMORY.md", "md", "memory")],
    )
    store.replace_file_chunks("TODO.md", [_chunk("TODO.md", "md", "task")])
    store.replace_file_chunks("leads.csv", [_chunk("leads.csv", "csv", "business_lead")])

    stats = compute_index_stats(store)

    assert stats.total_indexed == 4
    assert stats.by_file_type == {"md": 3, "csv": 1}
    assert stats.by_source_type == {"memory": 2, "task": 1, "business_lead": 1}
    assert sum(stats.by_file_type.values()) == stats.total_indexed
    assert sum(stats.by_source_type.values()) == stats.total_indexed
    assert stats.last_index_time == clock.last


def test_dashboard_counts(store):
    now = datetime.now().astimezone()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    today_ms = int(midnight.timestamp() * 1000)
    yesterday_ms = int((midnight - timedelta(hours=1)).timestamp() * 1000)

    store.insert_activity(yesterday_ms, "reindex", "old", "success")
    store.insert_activity(today_ms, "reindex", "new", "success")
    store.insert_activity(today_ms + 1000, "search", "newer", "failed")
    store.insert_task("backup", "", "cron", today_ms)
    store.insert_task("report", "", "at", today_ms, status="paused")
    store.replace_file_chunks("a.txt", [_chunk("a.txt", "txt", "workspace")])

    stats = compute_dashboard_stats(store, now=now)

    assert stats.to_dict() == {
        "totalActivities": 3,
        "todaysActivities": 2,
        "totalTasks": 2,
        "activeTasks": 1,
        "totalSearchItems": 1,
    }
