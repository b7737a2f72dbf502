"""Chunking strategies for workspace documents."""

from typing import Optional

from agentdesk.chunkers.line_chunker import LineChunker
from agentdesk.chunkers.outline_chunker import OutlineChunker
from agentdesk.config import Settings
from agentdesk.models import ChunkSpan
from agentdesk.protocols import ChunkingStrategy

# File types whose documents are split on header lines
OUTLINE_FILE_TYPES = {"md", "markdown"}


def is_outline_format(file_type: str) -> bool:
    return file_type.lower().lstrip(".") in OUTLINE_FILE_TYPES


def get_chunker(file_type: str, settings: Optional[Settings] = None) -> ChunkingStrategy:
    """Pick the chunking strategy for a file type.

    Args:
        file_type: Extension without the dot (e.g. "md", "csv")
        settings: Thresholds to use; class defaults when omitted

    Returns:
        An OutlineChunker for outline formats, otherwise a LineChunker
    """
    if is_outline_format(file_type):
        if settings is None:
            return OutlineChunker()
        return OutlineChunker(
            min_chunk_chars=settings.min_chunk_chars,
            max_content_length=settings.max_content_length,
            context_chars=settings.context_chars,
        )

    if settings is None:
        return LineChunker()
    return LineChunker(
        chunk_size=settings.chunk_size,
        max_content_length=settings.max_content_length,
        context_chars=settings.context_chars,
    )


def chunk(content: str, is_outline: bool, settings: Optional[Settings] = None) -> list[ChunkSpan]:
    """Split content with the outline or the flat strategy."""
    return get_chunker("md" if is_outline else "txt", settings).chunk(content)


__all__ = [
    "LineChunker",
    "OutlineChunker",
    "chunk",
    "get_chunker",
    "is_outline_format",
]
