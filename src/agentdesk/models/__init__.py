"""Data models for agentdesk."""

from agentdesk.models.activity import ActivityRecord
from agentdesk.models.schedule import CalendarEvent, ScheduledTask
from agentdesk.models.workspace import (
    ChunkSpan,
    FileEntry,
    IndexedChunk,
    IndexedFile,
    SearchFilters,
)

__all__ = [
    "ActivityRecord",
    "CalendarEvent",
    "ChunkSpan",
    "FileEntry",
    "IndexedChunk",
    "IndexedFile",
    "ScheduledTask",
    "SearchFilters",
]
