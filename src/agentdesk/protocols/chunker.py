"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from agentdesk.models import ChunkSpan


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Different strategies are picked per file type (see ``get_chunker``).
    """

    def chunk(self, text: str) -> list[ChunkSpan]:
        """Split text into spans with line positions."""
        ...
