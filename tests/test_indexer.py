import os
import sqlite3
import time
from pathlib import Path

import pytest

from agentdesk.activity import ActivityFeed
from agentdesk.errors import NotFoundError
from agentdesk.indexer import IncrementalIndexer
from agentdesk.search import SearchService

from conftest import write


@pytest.fixture
def indexer(store, settings):
    return IncrementalIndexer(store, settings=settings, activity=ActivityFeed(store, clock=store.clock))


def _touch_future(path, seconds=60):
    future = time.time() + seconds
    os.utime(path, (future, future))


def test_indexes_new_file_then_skips_it(indexer, store, workspace):
    write(workspace, "MEMORY.md", "# A\nhello\n# B\nworld\n")

    first = indexer.reindex()

    assert first.indexed_count == 1
    assert first.chunk_count == 2
    chunks = store.get_file_chunks("MEMORY.md")
    assert [c.title for c in chunks] == ["MEMORY.md", "MEMORY.md (part 2)"]
    assert {c.source_type for c in chunks} == {"memory"}
    assert {c.file_type for c in chunks} == {"md"}
    assert [(c.line_number, c.line_end) for c in chunks] == [(1, 2), (3, 4)]

    second = indexer.reindex()

    assert second.indexed_count == 0
    assert second.skipped_count == 1


def test_empty_file_is_scanned_but_not_indexed(indexer, store, workspace):
    write(workspace, "NOTES.txt", "")

    result = indexer.reindex()

    assert result.scanned_count == 1
    assert result.empty_count == 1
    assert result.indexed_count == 0
    assert store.count_chunks() == 0


def test_only_stale_files_are_reindexed(indexer, store, workspace):
    write(workspace, "MEMORY.md", "# A\nhello\n# B\nworld\n")
    notes = write(workspace, "notes/ideas.txt", "first idea\n")
    indexer.reindex()
    untouched = store.get_file_chunks("MEMORY.md")

    notes.write_text("first idea\nsecond idea\n", encoding="utf-8")
    _touch_future(notes)
    result = indexer.reindex()

    assert result.indexed_count == 1
    assert result.skipped_count == 1
    assert store.get_file_chunks("MEMORY.md") == untouched
    [chunk] = store.get_file_chunks("notes/ideas.txt")
    assert chunk.content == "first idea\nsecond idea\n"


def test_reindex_replaces_previous_chunks(indexer, store, workspace):
    path = write(workspace, "plan.md", "# One\nalpha alpha\n# Two\nbeta beta\n")
    indexer.reindex()
    assert len(store.get_file_chunks("plan.md")) == 2

    path.write_text("# Only\njust one section\n", encoding="utf-8")
    _touch_future(path)
    indexer.reindex()

    [chunk] = store.get_file_chunks("plan.md")
    assert chunk.content == "# Only\njust one section\n"
    assert chunk.title == "plan.md"


def test_full_reindex_ignores_timestamps(indexer, workspace):
    write(workspace, "a.txt", "alpha\n")
    write(workspace, "b.txt", "beta\n")
    indexer.reindex()

    result = indexer.reindex(full=True)

    assert result.indexed_count == 2
    assert result.skipped_count == 0


def test_prune_removes_deleted_files(indexer, store, workspace):
    write(workspace, "keep.txt", "keep me\n")
    gone = write(workspace, "gone.txt", "delete me\n")
    indexer.reindex()
    gone.unlink()

    without_prune = indexer.reindex()
    assert without_prune.removed_count == 0
    assert store.get_file_chunks("gone.txt")

    with_prune = indexer.reindex(prune=True)
    assert with_prune.removed_count == 1
    assert store.get_file_chunks("gone.txt") == []
    assert store.get_file_chunks("keep.txt")


def test_store_failure_counts_file_as_failed(indexer, store, workspace, monkeypatch):
    write(workspace, "a.txt", "alpha\n")
    write(workspace, "b.txt", "beta\n")
    real_replace = store.replace_file_chunks

    def replace(file_path, chunks):
        if file_path == "a.txt":
            raise sqlite3.OperationalError("database is locked")
        return real_replace(file_path, chunks)

    monkeypatch.setattr(store, "replace_file_chunks", replace)

    result = indexer.reindex()

    assert result.failed_count == 1
    assert result.indexed_count == 1
    assert store.get_file_chunks("a.txt") == []


def test_expired_timeout_leaves_work_for_next_pass(indexer, store, workspace):
    write(workspace, "a.txt", "alpha\n")

    result = indexer.reindex(timeout=-1, prune=True)

    assert result.timed_out
    assert result.indexed_count == 0
    assert store.count_chunks() == 0


def test_records_pass_in_activity_feed(indexer, store, workspace):
    write(workspace, "a.txt", "alpha\n")

    indexer.reindex()

    [record] = store.query_activities(limit=10)
    assert record.action_type == "reindex"
    assert record.status == "success"
    assert record.source == "system"
    assert record.metadata["indexedCount"] == 1
    assert store.get_metadata("last_reindex") is not None


def test_missing_workspace_raises(store, settings, tmp_path):
    indexer = IncrementalIndexer(store, settings=settings)
    with pytest.raises(NotFoundError):
        indexer.reindex(tmp_path / "nope")


def test_prune_keeps_manual_entries(indexer, store, workspace):
    write(workspace, "keep.txt", "keep me\n")
    SearchService(store).add_entry(
        content="Call the supplier",
        title="Supplier call",
        file_path="entries/supplier",
        file_type="txt",
        source_type="task",
        content_type="note",
    )

    result = indexer.reindex(prune=True)

    assert result.removed_count == 0
    [entry] = store.get_file_chunks("entries/supplier")
    assert entry.content_type == "note"


def test_file_without_chunks_counts_as_empty(indexer, store, workspace):
    write(workspace, "x.md", "# Title\n")

    first = indexer.reindex()
    second = indexer.reindex()

    for result in (first, second):
        assert result.indexed_count == 0
        assert result.chunk_count == 0
        assert result.empty_count == 1
    assert store.get_file_chunks("x.md") == []


def test_file_shrinking_to_no_chunks_drops_old_ones(indexer, store, workspace):
    path = write(workspace, "plan.md", "# Plan\nsome real content\n")
    indexer.reindex()
    assert store.get_file_chunks("plan.md")

    path.write_text("# Plan\n", encoding="utf-8")
    _touch_future(path)
    result = indexer.reindex()

    assert result.empty_count == 1
    assert store.get_file_chunks("plan.md") == []


def test_unreadable_content_is_treated_as_empty(indexer, store, workspace, monkeypatch):
    (workspace / "blob.txt").write_bytes(b"\x00\x01\x02binary\x00data")
    (workspace / "latin1.csv").write_bytes(b"caf\xe9,1\nna\xefve,2\n")
    write(workspace, "locked.md", "# Locked\nsecret section text\n")
    write(workspace, "fine.txt", "readable\n")

    real_read_bytes = Path.read_bytes

    def read_bytes(self):
        if self.name == "locked.md":
            raise PermissionError(13, "Permission denied", str(self))
        return real_read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)

    result = indexer.reindex()

    assert result.empty_count == 3
    assert result.indexed_count == 1
    assert result.failed_count == 0
    assert [f.file_path for f in store.indexed_files()] == ["fine.txt"]


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores file modes")
def test_permission_denied_file_is_treated_as_empty(indexer, store, workspace):
    path = write(workspace, "locked.txt", "secret\n")
    path.chmod(0)
    try:
        result = indexer.reindex()
    finally:
        path.chmod(0o644)

    assert result.empty_count == 1
    assert store.get_file_chunks("locked.txt") == []
