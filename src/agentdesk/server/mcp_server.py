"""FastMCP server exposing the workspace index to the agent."""

from mcp.server.fastmcp import FastMCP

from agentdesk.activity import ActivityFeed
from agentdesk.config import Settings
from agentdesk.errors import NotFoundError
from agentdesk.indexer import IncrementalIndexer
from agentdesk.models import SearchFilters
from agentdesk.search import SearchService
from agentdesk.stats import compute_index_stats
from agentdesk.storage import WorkspaceStore


def create_mcp_server(settings: Settings) -> FastMCP:
    """Create an MCP server over one workspace and its index.

    Args:
        settings: Workspace and database locations plus chunking thresholds

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(name="agentdesk")

    store = WorkspaceStore(settings.database_path)
    store.initialize()
    search_service = SearchService(store, default_limit=settings.search_limit)
    feed = ActivityFeed(store, page_size=settings.activity_page_size)
    indexer = IncrementalIndexer(store, settings=settings, activity=feed)

    @mcp.tool()
    def ls(path: str = "") -> str:
        """List indexed files.

        Args:
            path: Optional path prefix to filter results (e.g. "memory/")

        Returns:
            One line per file with source type and chunk count
        """
        files = [f for f in search_service.indexed_files() if f.file_path.startswith(path)]
        if not files:
            return f"No indexed files matching '{path}'"

        return "\n".join(
            f"{f.file_path:<60} {f.source_type:<14} {f.chunk_count:>4} chunks" for f in files
        )

    @mcp.tool()
    def read(path: str) -> str:
        """Read an indexed file's chunks in line order.

        Args:
            path: File path as shown in ls output

        Returns:
            The stored text of the file
        """
        chunks = store.get_file_chunks(path)
        if not chunks:
            return f"Error: File not indexed: {path}"
        return "".join(chunk.content for chunk in chunks)

    @mcp.tool()
    def search(
        query: str,
        limit: int = 10,
        file_type: str = "",
        source_type: str = "",
    ) -> str:
        """Full-text search across the workspace index.

        Args:
            query: Words to look for
            limit: Maximum number of results to return (default: 10)
            file_type: Only match this extension (md, csv, txt, json)
            source_type: Only match this category (memory, task, calendar,
                business_lead, paper_trading, agent_config, workspace)

        Returns:
            Ranked list of matching chunks with their location
        """
        filters = SearchFilters(file_type=file_type or None, source_type=source_type or None)
        results = search_service.search(query, limit=limit, filters=filters)
        if not results:
            return f"No results found for: {query}"

        lines = []
        for i, chunk in enumerate(results, 1):
            text = chunk.content[:200].replace("\n", " ")
            if len(chunk.content) > 200:
                text += "..."
            location = f"{chunk.file_path}:{chunk.line_number}" if chunk.line_number else chunk.file_path
            lines.append(f"{i}. [{chunk.source_type}] {chunk.title} ({location})")
            lines.append(f"   {text}")
            lines.append("")
        return "\n".join(lines)

    @mcp.tool()
    def index_stats() -> str:
        """Summarize index contents by file type and source type."""
        stats = compute_index_stats(store)
        lines = [f"Total chunks: {stats.total_indexed}"]
        for label, counts in (("By file type", stats.by_file_type), ("By source", stats.by_source_type)):
            lines.append(f"{label}:")
            lines.extend(f"  {key}: {count}" for key, count in sorted(counts.items()))
        return "\n".join(lines)

    @mcp.tool()
    def recent_activity(limit: int = 20, action_type: str = "") -> str:
        """Show the most recent entries of the activity log.

        Args:
            limit: Number of entries (default: 20)
            action_type: Only show this action type
        """
        records = feed.list(limit=limit, action_type=action_type or None)
        if not records:
            return "No activity recorded"
        return "\n".join(
            f"{r.timestamp} [{r.status}] {r.action_type}: {r.description}" for r in records
        )

    @mcp.tool()
    def reindex(full: bool = False) -> str:
        """Re-index changed workspace files.

        Args:
            full: Reindex every file, not only changed ones
        """
        try:
            result = indexer.reindex(full=full)
        except NotFoundError as e:
            return f"Error: {e}"
        return (
            f"Indexed {result.indexed_count} files ({result.chunk_count} chunks), "
            f"skipped {result.skipped_count}, failed {result.failed_count}, "
            f"scanned {result.scanned_count}"
        )

    return mcp
