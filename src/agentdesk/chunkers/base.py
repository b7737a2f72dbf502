"""Shared line splitting and finishing steps for chunking strategies."""

from agentdesk.models import ChunkSpan

# (text, line_start, line_end)
RawSpan = tuple[str, int, int]


def split_lines(text: str) -> list[str]:
    """Split on line feeds only, so line numbers match the file's real lines.

    A trailing newline does not produce an extra empty line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def finalize_spans(
    raw_spans: list[RawSpan],
    max_content_length: int,
    context_chars: int,
) -> list[ChunkSpan]:
    """Drop blank spans, attach context and apply the storage cap.

    Each span after the first gets the tail of the previous span's text as
    its context. The cap applies to stored text only, so context is taken
    from the untruncated previous span.
    """
    spans: list[ChunkSpan] = []
    previous: str | None = None

    for text, line_start, line_end in raw_spans:
        if not text.strip():
            continue

        context = None
        if previous is not None and context_chars > 0:
            context = previous[-context_chars:]

        spans.append(
            ChunkSpan(
                text=text[:max_content_length],
                line_start=line_start,
                line_end=line_end,
                context=context,
            )
        )
        previous = text

    return spans
