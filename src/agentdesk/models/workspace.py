"""Core data models for workspace files and index chunks."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class FileEntry:
    """Metadata for one indexable file found by a scan."""

    path: str
    name: str
    type: str
    size: int
    modified: datetime

    @property
    def modified_ms(self) -> int:
        """Modification time as epoch milliseconds."""
        return int(self.modified.timestamp() * 1000)


@dataclass(frozen=True)
class ChunkSpan:
    """A chunk of text with its position in the source file."""

    text: str
    line_start: int
    line_end: int
    context: Optional[str] = None


@dataclass
class IndexedChunk:
    """One searchable unit stored in the index."""

    content: str
    title: str
    file_path: str
    file_type: str
    source_type: str
    content_type: str = "document"
    line_number: Optional[int] = None
    line_end: Optional[int] = None
    context: Optional[str] = None
    last_indexed: Optional[int] = None
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "title": self.title,
            "filePath": self.file_path,
            "fileType": self.file_type,
            "sourceType": self.source_type,
            "contentType": self.content_type,
            "lineNumber": self.line_number,
            "lineEnd": self.line_end,
            "context": self.context,
            "lastIndexed": self.last_indexed,
        }


@dataclass(frozen=True)
class SearchFilters:
    """Optional equality constraints applied together to a search."""

    file_type: Optional[str] = None
    source_type: Optional[str] = None
    content_type: Optional[str] = None

    def constraints(self) -> list[tuple[str, str]]:
        """(column, value) pairs for the filters that are set."""
        pairs = [
            ("file_type", self.file_type),
            ("source_type", self.source_type),
            ("content_type", self.content_type),
        ]
        return [(column, value) for column, value in pairs if value]


@dataclass
class IndexedFile:
    """All chunks currently stored for one file path."""

    file_path: str
    file_type: str
    source_type: str
    last_indexed: int
    chunk_count: int = 0
    entries: list[IndexedChunk] = field(default_factory=list)
