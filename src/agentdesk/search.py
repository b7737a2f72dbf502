"""Full-text search over the workspace index."""

import logging
import re
from typing import Optional

from agentdesk.errors import ValidationError
from agentdesk.models import IndexedChunk, IndexedFile, SearchFilters
from agentdesk.storage import WorkspaceStore

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_QUERY_TERMS = 12
MATCH_CONTEXT_CHARS = 200

TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def build_match_query(query: str) -> str:
    """Turn free text into an FTS5 MATCH expression.

    Terms are quoted so user input can't inject FTS syntax, OR-ed together
    and the last one is matched as a prefix for search-as-you-type.
    """
    terms: list[str] = []
    for token in TOKEN_RE.findall(query.lower()):
        if token not in terms:
            terms.append(token)
    if not terms:
        return ""

    fragments = [f'"{term}"' for term in terms[:MAX_QUERY_TERMS]]
    fragments[-1] += "*"
    return " OR ".join(fragments)


class SearchService:
    """Query side of the workspace index."""

    def __init__(self, store: WorkspaceStore, default_limit: int = 20):
        self.store = store
        self.default_limit = default_limit

    def search(
        self,
        query: str,
        limit: Optional[int] = None,
        filters: Optional[SearchFilters] = None,
    ) -> list[IndexedChunk]:
        """Ranked chunks matching the query and every supplied filter.

        Queries shorter than two characters return no results without
        touching the store.
        """
        limit = self.default_limit if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        if len(query.strip()) < MIN_QUERY_LENGTH:
            return []

        match_query = build_match_query(query)
        if not match_query:
            return []

        results = self.store.search(match_query, filters or SearchFilters(), limit)
        logger.debug(f"Search {query!r} -> {len(results)} results")
        return results

    def search_with_context(
        self,
        query: str,
        limit: int = 10,
        filters: Optional[SearchFilters] = None,
    ) -> list[dict]:
        """Search results with a ``matchContext`` excerpt for display."""
        return [
            {
                **chunk.to_dict(),
                "matchContext": chunk.context or chunk.content[:MATCH_CONTEXT_CHARS],
            }
            for chunk in self.search(query, limit, filters)
        ]

    def indexed_files(self, include_entries: bool = False) -> list[IndexedFile]:
        return self.store.indexed_files(include_entries=include_entries)

    def recent(self, limit: int = 20) -> list[IndexedChunk]:
        return self.store.recent_chunks(limit)

    def clear_file(self, file_path: str) -> int:
        """Remove a file from the index, returning the number of chunks deleted."""
        removed = self.store.clear_file(file_path)
        logger.info(f"Cleared {removed} chunks for {file_path}")
        return removed

    def add_entry(
        self,
        content: str,
        title: str,
        file_path: str,
        file_type: str,
        source_type: str,
        content_type: str = "document",
        line_number: Optional[int] = None,
        context: Optional[str] = None,
        max_content_length: int = 10000,
    ) -> int:
        """Index a single entry, replacing whatever is stored for its path.

        Returns the new entry's ID.
        """
        missing = [
            name
            for name, value in (
                ("content", content),
                ("title", title),
                ("filePath", file_path),
                ("fileType", file_type),
                ("sourceType", source_type),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        entry = IndexedChunk(
            content=content[:max_content_length],
            title=title,
            file_path=file_path,
            file_type=file_type,
            source_type=source_type,
            content_type=content_type,
            line_number=line_number,
            context=context,
        )
        return self.store.replace_file_chunks(file_path, [entry])[0]
