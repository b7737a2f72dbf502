"""SQLite-backed storage for the workspace index, activity log and schedule."""

import json
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from agentdesk.models import (
    ActivityRecord,
    CalendarEvent,
    IndexedChunk,
    IndexedFile,
    ScheduledTask,
    SearchFilters,
)
from agentdesk.storage.schema import SCHEMA

FILTER_COLUMNS = {"file_type", "source_type", "content_type"}


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def _dump_json(value: Optional[dict]) -> Optional[str]:
    return json.dumps(value) if value is not None else None


def _load_json(value: Optional[str]) -> Optional[dict]:
    return json.loads(value) if value else None


class WorkspaceStore:
    """SQLite-backed store for index chunks, activities and schedule records."""

    def __init__(self, path: Path | str, clock: Callable[[], int] = now_ms):
        self.path = Path(path)
        self.clock = clock

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def set_metadata(self, key: str, value: str) -> None:
        """Store a metadata key-value pair."""
        with self.connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_metadata(self, key: str) -> Optional[str]:
        """Retrieve a metadata value by key."""
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    # Index collection

    def replace_file_chunks(self, file_path: str, chunks: list[IndexedChunk]) -> list[int]:
        """Replace every chunk stored for a file with a new set.

        Runs as one transaction, so readers never see a mix of old and new
        chunks for the same file. Returns the new chunk IDs.
        """
        indexed_at = self.clock()
        chunk_ids = []
        with self.connection() as conn:
            self._delete_file(conn, file_path)
            for chunk in chunks:
                cursor = conn.execute(
                    """INSERT INTO chunks
                       (file_path, title, content, file_type, source_type, content_type,
                        line_number, line_end, context, last_indexed)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        file_path,
                        chunk.title,
                        chunk.content,
                        chunk.file_type,
                        chunk.source_type,
                        chunk.content_type,
                        chunk.line_number,
                        chunk.line_end,
                        chunk.context,
                        indexed_at,
                    ),
                )
                conn.execute(
                    "INSERT INTO chunks_fts (rowid, content) VALUES (?, ?)",
                    (cursor.lastrowid, chunk.content),
                )
                chunk_ids.append(cursor.lastrowid)
        return chunk_ids

    def clear_file(self, file_path: str) -> int:
        """Delete all chunks for a file and return how many were removed."""
        with self.connection() as conn:
            return self._delete_file(conn, file_path)

    @staticmethod
    def _delete_file(conn: sqlite3.Connection, file_path: str) -> int:
        conn.execute(
            "DELETE FROM chunks_fts WHERE rowid IN (SELECT id FROM chunks WHERE file_path = ?)",
            (file_path,),
        )
        return conn.execute("DELETE FROM chunks WHERE file_path = ?", (file_path,)).rowcount

    def get_file_chunks(self, file_path: str) -> list[IndexedChunk]:
        """All chunks for one file in line order."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM chunks WHERE file_path = ? ORDER BY line_number, id",
                (file_path,),
            )
            return [self._row_to_chunk(row) for row in cursor]

    def indexed_files(
        self,
        include_entries: bool = False,
        content_type: Optional[str] = None,
    ) -> list[IndexedFile]:
        """Indexed files grouped by path, optionally only one content type.

        ``last_indexed`` is the oldest chunk timestamp of the file, so a
        partially written set still reads as stale.
        """
        where = "WHERE content_type = ?" if content_type else ""
        params = [content_type] if content_type else []
        with self.connection() as conn:
            rows = conn.execute(
                f"""SELECT file_path, MIN(file_type) AS file_type,
                          MIN(source_type) AS source_type,
                          MIN(last_indexed) AS last_indexed,
                          COUNT(*) AS chunk_count
                   FROM chunks {where}
                   GROUP BY file_path ORDER BY file_path""",
                params,
            ).fetchall()

        files = [
            IndexedFile(
                file_path=row["file_path"],
                file_type=row["file_type"],
                source_type=row["source_type"],
                last_indexed=row["last_indexed"],
                chunk_count=row["chunk_count"],
            )
            for row in rows
        ]
        if include_entries:
            for indexed in files:
                indexed.entries = self.get_file_chunks(indexed.file_path)
        return files

    def search(self, match_query: str, filters: SearchFilters, limit: int) -> list[IndexedChunk]:
        """Full-text search ranked by bm25, narrowed by equality filters."""
        clauses = ["chunks_fts MATCH ?"]
        params: list[Any] = [match_query]
        for column, value in filters.constraints():
            if column not in FILTER_COLUMNS:
                raise ValueError(f"Unknown filter column: {column}")
            clauses.append(f"c.{column} = ?")
            params.append(value)
        params.append(limit)
        where_sql = " AND ".join(clauses)

        sql = f"""
            SELECT c.*, bm25(chunks_fts) AS score
            FROM chunks_fts
            JOIN chunks c ON c.id = chunks_fts.rowid
            WHERE {where_sql}
            ORDER BY score, c.id
            LIMIT ?
        """
        with self.connection() as conn:
            return [self._row_to_chunk(row) for row in conn.execute(sql, params)]

    def recent_chunks(self, limit: int) -> list[IndexedChunk]:
        """Most recently indexed chunks first."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM chunks ORDER BY last_indexed DESC, id DESC LIMIT ?",
                (limit,),
            )
            return [self._row_to_chunk(row) for row in cursor]

    def chunk_facets(self) -> list[sqlite3.Row]:
        """file_type, source_type and last_indexed of every chunk."""
        with self.connection() as conn:
            return conn.execute(
                "SELECT file_type, source_type, last_indexed FROM chunks"
            ).fetchall()

    def count_chunks(self) -> int:
        with self.connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM chunks").fetchone()[0]

    @staticmethod
    def _row_to_chunk(row: sqlite3.Row) -> IndexedChunk:
        return IndexedChunk(
            id=row["id"],
            content=row["content"],
            title=row["title"],
            file_path=row["file_path"],
            file_type=row["file_type"],
            source_type=row["source_type"],
            content_type=row["content_type"],
            line_number=row["line_number"],
            line_end=row["line_end"],
            context=row["context"],
            last_indexed=row["last_indexed"],
        )

    # Activity collection

    def insert_activity(
        self,
        timestamp: int,
        action_type: str,
        description: str,
        status: str,
        metadata: Optional[dict] = None,
        source: str = "agent",
    ) -> ActivityRecord:
        """Append one activity record."""
        with self.connection() as conn:
            cursor = conn.execute(
                """INSERT INTO activities
                   (timestamp, action_type, description, status, metadata, source)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (timestamp, action_type, description, status, _dump_json(metadata), source),
            )
            activity_id = cursor.lastrowid

        return ActivityRecord(
            id=activity_id,
            timestamp=timestamp,
            action_type=action_type,
            description=description,
            status=status,
            metadata=metadata,
            source=source,
        )

    def query_activities(
        self,
        limit: int,
        before: Optional[int] = None,
        action_type: Optional[str] = None,
    ) -> list[ActivityRecord]:
        """Newest activities first, optionally older than ``before``."""
        clauses = []
        params: list[Any] = []
        if action_type:
            clauses.append("action_type = ?")
            params.append(action_type)
        if before is not None:
            clauses.append("timestamp < ?")
            params.append(before)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)

        with self.connection() as conn:
            cursor = conn.execute(
                f"SELECT * FROM activities {where} ORDER BY timestamp DESC, id DESC LIMIT ?",
                params,
            )
            return [self._row_to_activity(row) for row in cursor]

    def activities_between(
        self,
        start: int,
        end: Optional[int] = None,
        descending: bool = True,
    ) -> list[ActivityRecord]:
        """Activities with start <= timestamp (<= end when given)."""
        order = "DESC" if descending else "ASC"
        sql = "SELECT * FROM activities WHERE timestamp >= ?"
        params: list[Any] = [start]
        if end is not None:
            sql += " AND timestamp <= ?"
            params.append(end)
        sql += f" ORDER BY timestamp {order}, id {order}"

        with self.connection() as conn:
            return [self._row_to_activity(row) for row in conn.execute(sql, params)]

    def count_activities(self, since: Optional[int] = None) -> int:
        with self.connection() as conn:
            if since is None:
                return conn.execute("SELECT COUNT(*) FROM activities").fetchone()[0]
            return conn.execute(
                "SELECT COUNT(*) FROM activities WHERE timestamp >= ?", (since,)
            ).fetchone()[0]

    @staticmethod
    def _row_to_activity(row: sqlite3.Row) -> ActivityRecord:
        return ActivityRecord(
            id=row["id"],
            timestamp=row["timestamp"],
            action_type=row["action_type"],
            description=row["description"],
            status=row["status"],
            metadata=_load_json(row["metadata"]),
            source=row["source"],
        )

    # Scheduled tasks

    def insert_task(
        self,
        name: str,
        description: str,
        schedule_type: str,
        next_run_at: int,
        schedule_expr: Optional[str] = None,
        payload: Optional[str] = None,
        status: str = "active",
    ) -> ScheduledTask:
        with self.connection() as conn:
            cursor = conn.execute(
                """INSERT INTO scheduled_tasks
                   (name, description, schedule_type, schedule_expr, next_run_at, status, payload)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (name, description, schedule_type, schedule_expr, next_run_at, status, payload),
            )
            task_id = cursor.lastrowid

        return ScheduledTask(
            id=task_id,
            name=name,
            description=description,
            schedule_type=schedule_type,
            schedule_expr=schedule_expr,
            next_run_at=next_run_at,
            status=status,
            payload=payload,
        )

    def get_task(self, task_id: int) -> Optional[ScheduledTask]:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT * FROM scheduled_tasks WHERE id = ?", (task_id,)
            ).fetchone()
            return self._row_to_task(row) if row else None

    def list_tasks(
        self,
        status: Optional[str] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[ScheduledTask]:
        """Tasks ordered by next run time, narrowed by the given filters."""
        clauses = []
        params: list[Any] = []
        if status:
            clauses.append("status = ?")
            params.append(status)
        if start is not None:
            clauses.append("next_run_at >= ?")
            params.append(start)
        if end is not None:
            clauses.append("next_run_at <= ?")
            params.append(end)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self.connection() as conn:
            cursor = conn.execute(
                f"SELECT * FROM scheduled_tasks {where} ORDER BY next_run_at ASC, id ASC",
                params,
            )
            return [self._row_to_task(row) for row in cursor]

    def update_task_status(self, task_id: int, status: str) -> bool:
        with self.connection() as conn:
            cursor = conn.execute(
                "UPDATE scheduled_tasks SET status = ? WHERE id = ?", (status, task_id)
            )
            return cursor.rowcount > 0

    def delete_task(self, task_id: int) -> bool:
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM scheduled_tasks WHERE id = ?", (task_id,))
            return cursor.rowcount > 0

    def count_tasks(self, status: Optional[str] = None) -> int:
        with self.connection() as conn:
            if status is None:
                return conn.execute("SELECT COUNT(*) FROM scheduled_tasks").fetchone()[0]
            return conn.execute(
                "SELECT COUNT(*) FROM scheduled_tasks WHERE status = ?", (status,)
            ).fetchone()[0]

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> ScheduledTask:
        return ScheduledTask(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            schedule_type=row["schedule_type"],
            schedule_expr=row["schedule_expr"],
            next_run_at=row["next_run_at"],
            last_run_at=row["last_run_at"],
            status=row["status"],
            payload=row["payload"],
        )

    # Calendar events

    def insert_event(
        self,
        title: str,
        start_time: int,
        event_type: str,
        description: Optional[str] = None,
        end_time: Optional[int] = None,
        recurrence: Optional[str] = None,
        metadata: Optional[dict] = None,
        source: Optional[str] = None,
        status: str = "scheduled",
    ) -> CalendarEvent:
        with self.connection() as conn:
            cursor = conn.execute(
                """INSERT INTO calendar_events
                   (title, description, start_time, end_time, type, recurrence,
                    status, metadata, source)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    title,
                    description,
                    start_time,
                    end_time,
                    event_type,
                    recurrence,
                    status,
                    _dump_json(metadata),
                    source,
                ),
            )
            event_id = cursor.lastrowid

        return CalendarEvent(
            id=event_id,
            title=title,
            description=description,
            start_time=start_time,
            end_time=end_time,
            type=event_type,
            recurrence=recurrence,
            status=status,
            metadata=metadata,
            source=source,
        )

    def get_event(self, event_id: int) -> Optional[CalendarEvent]:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT * FROM calendar_events WHERE id = ?", (event_id,)
            ).fetchone()
            return self._row_to_event(row) if row else None

    def events_between(
        self,
        start: int,
        end: Optional[int] = None,
        end_inclusive: bool = True,
        limit: Optional[int] = None,
    ) -> list[CalendarEvent]:
        """Events starting in [start, end] (or [start, end) ) by start time."""
        sql = "SELECT * FROM calendar_events WHERE start_time >= ?"
        params: list[Any] = [start]
        if end is not None:
            sql += " AND start_time <= ?" if end_inclusive else " AND start_time < ?"
            params.append(end)
        sql += " ORDER BY start_time ASC, id ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        with self.connection() as conn:
            return [self._row_to_event(row) for row in conn.execute(sql, params)]

    def events_by_type(self, event_type: str) -> list[CalendarEvent]:
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM calendar_events WHERE type = ? ORDER BY start_time ASC, id ASC",
                (event_type,),
            )
            return [self._row_to_event(row) for row in cursor]

    def update_event_status(self, event_id: int, status: str) -> bool:
        with self.connection() as conn:
            cursor = conn.execute(
                "UPDATE calendar_events SET status = ? WHERE id = ?", (status, event_id)
            )
            return cursor.rowcount > 0

    def delete_event(self, event_id: int) -> bool:
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM calendar_events WHERE id = ?", (event_id,))
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> CalendarEvent:
        return CalendarEvent(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            start_time=row["start_time"],
            end_time=row["end_time"],
            type=row["type"],
            recurrence=row["recurrence"],
            status=row["status"],
            metadata=_load_json(row["metadata"]),
            source=row["source"],
        )
