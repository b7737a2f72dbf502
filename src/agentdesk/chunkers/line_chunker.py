"""Greedy line-packing chunker for flat formats."""

from agentdesk.chunkers.base import RawSpan, finalize_spans, split_lines
from agentdesk.models import ChunkSpan


class LineChunker:
    """Flat chunking: pack whole lines until the size threshold.

    - Lines are appended to a running buffer
    - When the next line would push the buffer past ``chunk_size`` the
      buffer is closed and a new one starts with that line
    - A line is never split, so one long line can exceed the threshold
    """

    CHUNK_SIZE = 1000
    MAX_CONTENT_LENGTH = 10000
    CONTEXT_CHARS = 100

    def __init__(
        self,
        chunk_size: int | None = None,
        max_content_length: int | None = None,
        context_chars: int | None = None,
    ):
        self.chunk_size = chunk_size or self.CHUNK_SIZE
        self.max_content_length = max_content_length or self.MAX_CONTENT_LENGTH
        self.context_chars = self.CONTEXT_CHARS if context_chars is None else context_chars

    def chunk(self, text: str) -> list[ChunkSpan]:
        """Split text into line-aligned chunks.

        Args:
            text: The file content

        Returns:
            List of ChunkSpan objects with 1-based line ranges
        """
        if not text or not text.strip():
            return []

        raw: list[RawSpan] = []
        buffer = ""
        buffer_start = 1

        for line_no, line in enumerate(split_lines(text), start=1):
            piece = line + "\n"
            if buffer and len(buffer) + len(piece) > self.chunk_size:
                raw.append((buffer, buffer_start, line_no - 1))
                buffer = piece
                buffer_start = line_no
            else:
                if not buffer:
                    buffer_start = line_no
                buffer += piece

        if buffer:
            raw.append((buffer, buffer_start, buffer_start + buffer.count("\n") - 1))

        return finalize_spans(raw, self.max_content_length, self.context_chars)
