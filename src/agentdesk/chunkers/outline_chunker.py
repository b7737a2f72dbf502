"""Header-aware chunker for outline documents such as markdown."""

from agentdesk.chunkers.base import RawSpan, finalize_spans, split_lines
from agentdesk.models import ChunkSpan


class OutlineChunker:
    """Split on header lines, one chunk per section.

    A header line only opens a new chunk when the current one already has
    non-blank text, so a document starting with a header does not produce
    an empty leading chunk. Sections shorter than ``min_chunk_chars`` are
    dropped as noise.

    The length check counts the raw section text, whitespace and newlines
    included: ``"# A\\nhello\\n"`` is 10 characters and is kept at the
    default threshold even though only 9 of them are non-whitespace.
    """

    HEADER_MARKER = "#"
    MIN_CHUNK_CHARS = 10
    MAX_CONTENT_LENGTH = 10000
    CONTEXT_CHARS = 100

    def __init__(
        self,
        min_chunk_chars: int | None = None,
        max_content_length: int | None = None,
        context_chars: int | None = None,
        header_marker: str | None = None,
    ):
        self.min_chunk_chars = self.MIN_CHUNK_CHARS if min_chunk_chars is None else min_chunk_chars
        self.max_content_length = max_content_length or self.MAX_CONTENT_LENGTH
        self.context_chars = self.CONTEXT_CHARS if context_chars is None else context_chars
        self.header_marker = header_marker or self.HEADER_MARKER

    def chunk(self, text: str) -> list[ChunkSpan]:
        """Split text into header-delimited sections.

        Args:
            text: The file content

        Returns:
            List of ChunkSpan objects, each starting at a header except
            possibly the first
        """
        if not text or not text.strip():
            return []

        raw: list[RawSpan] = []
        current = ""
        current_start = 1
        line_no = 0

        for line_no, line in enumerate(split_lines(text), start=1):
            if line.startswith(self.header_marker) and current.strip():
                raw.append((current, current_start, line_no - 1))
                current = line + "\n"
                current_start = line_no
            else:
                current += line + "\n"

        if current.strip():
            raw.append((current, current_start, line_no))

        kept = [span for span in raw if len(span[0]) >= self.min_chunk_chars]
        return finalize_spans(kept, self.max_content_length, self.context_chars)
