"""CLI entry point for agentdesk."""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Literal, Optional, cast

from agentdesk.activity import ActivityFeed
from agentdesk.config import Settings, get_settings
from agentdesk.errors import AgentDeskError
from agentdesk.indexer import IncrementalIndexer
from agentdesk.models import SearchFilters
from agentdesk.search import SearchService
from agentdesk.stats import compute_index_stats
from agentdesk.storage import WorkspaceStore

logger = logging.getLogger(__name__)


def _open_store(settings: Settings) -> WorkspaceStore:
    store = WorkspaceStore(settings.database_path)
    store.initialize()
    return store


def index(settings: Settings, full: bool = False, prune: bool = False, timeout: Optional[float] = None) -> None:
    """Bring the index up to date with the workspace.

    Args:
        settings: Workspace and database locations
        full: Reindex every file regardless of modification time
        prune: Drop index entries for files that no longer exist
        timeout: Stop after this many seconds
    """
    store = _open_store(settings)
    feed = ActivityFeed(store, page_size=settings.activity_page_size)
    indexer = IncrementalIndexer(store, settings=settings, activity=feed)

    try:
        result = indexer.reindex(full=full, prune=prune, timeout=timeout)
    except AgentDeskError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("")
    if result.empty_count:
        logger.info(f"Empty files: {result.empty_count}")
    if prune:
        logger.info(f"Removed: {result.removed_count}")
    if result.timed_out:
        logger.info("Stopped early; run again to finish")


def search(settings: Settings, query: str, limit: int, filters: SearchFilters) -> None:
    """Print ranked search results."""
    service = SearchService(_open_store(settings), default_limit=settings.search_limit)
    try:
        results = service.search(query, limit=limit, filters=filters)
    except AgentDeskError as e:
        logger.error(str(e))
        sys.exit(1)

    if not results:
        print(f"No results found for: {query}")
        return

    for i, chunk in enumerate(results, 1):
        location = f"{chunk.file_path}:{chunk.line_number}" if chunk.line_number else chunk.file_path
        preview = chunk.content[: settings.preview_chars].replace("\n", " ")
        print(f"{i}. [{chunk.source_type}] {chunk.title} ({location})")
        print(f"   {preview}")


def stats(settings: Settings) -> None:
    """Print chunk counts by file type and source type."""
    result = compute_index_stats(_open_store(settings))

    print(f"Total chunks: {result.total_indexed}")
    if result.last_index_time is not None:
        when = datetime.fromtimestamp(result.last_index_time / 1000, tz=timezone.utc)
        print(f"Last indexed: {when.isoformat()}")
    print("")
    print("By file type:")
    for key, count in sorted(result.by_file_type.items()):
        print(f"  {key}: {count}")
    print("By source type:")
    for key, count in sorted(result.by_source_type.items()):
        print(f"  {key}: {count}")


def activity(settings: Settings, limit: int) -> None:
    """Print the newest activity records."""
    feed = ActivityFeed(_open_store(settings), page_size=settings.activity_page_size)
    records = feed.list(limit=limit)
    if not records:
        print("No activity recorded")
        return

    for record in records:
        when = datetime.fromtimestamp(record.timestamp / 1000, tz=timezone.utc)
        print(f"{when:%Y-%m-%d %H:%M:%S} [{record.status}] {record.action_type}: {record.description}")


def clear(settings: Settings, path: str) -> None:
    """Remove one file's chunks from the index."""
    service = SearchService(_open_store(settings))
    removed = service.clear_file(path)
    print(f"Removed {removed} chunks for {path}")


def serve(settings: Settings, transport: str = "http") -> None:
    """Serve the dashboard HTTP API or the MCP server.

    Args:
        settings: Server and workspace configuration
        transport: http for the dashboard API, stdio or sse for MCP
    """
    if transport == "http":
        # Import here to avoid loading the web stack unless needed
        import uvicorn

        from agentdesk.server import create_app

        logger.info(f"Serving HTTP API on {settings.host}:{settings.port}")
        uvicorn.run(create_app(), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        return

    from agentdesk.server import create_mcp_server

    logger.info(f"Serving MCP via {transport}")
    mcp = create_mcp_server(settings)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def info(settings: Settings) -> None:
    """Show where the workspace and index live and what they hold."""
    store = _open_store(settings)

    print(f"Workspace: {settings.workspace_path}")
    print(f"Database: {settings.database_path}")
    if settings.database_path.exists():
        print(f"  Size: {settings.database_path.stat().st_size / 1024:.1f} KB")
    print("")
    print("Metadata:")
    for key in ("workspace_path", "last_reindex"):
        value = store.get_metadata(key)
        if value:
            print(f"  {key}: {value}")
    print("")
    print("Contents:")
    print(f"  Indexed files: {len(store.indexed_files())}")
    print(f"  Chunks: {store.count_chunks()}")
    print(f"  Activities: {store.count_activities()}")
    print(f"  Scheduled tasks: {store.count_tasks()}")


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="agentdesk",
        description="agentdesk - workspace index and activity feed for an agent dashboard",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # index command
    index_parser = subparsers.add_parser("index", help="Index new and changed workspace files")
    index_parser.add_argument("--full", action="store_true", help="Reindex every file")
    index_parser.add_argument("--prune", action="store_true", help="Drop entries for deleted files")
    index_parser.add_argument("--timeout", type=float, default=None, help="Stop after this many seconds")

    # search command
    search_parser = subparsers.add_parser("search", help="Full-text search the index")
    search_parser.add_argument("query", help="Words to look for")
    search_parser.add_argument("-n", "--limit", type=int, default=10, help="Maximum results (default: 10)")
    search_parser.add_argument("--file-type", default=None, help="Only match this extension")
    search_parser.add_argument("--source-type", default=None, help="Only match this category")
    search_parser.add_argument("--content-type", default=None, help="Only match this content type")

    # stats command
    subparsers.add_parser("stats", help="Show index statistics")

    # activity command
    activity_parser = subparsers.add_parser("activity", help="Show recent activity")
    activity_parser.add_argument("-n", "--limit", type=int, default=20, help="Number of entries (default: 20)")

    # clear command
    clear_parser = subparsers.add_parser("clear", help="Remove a file from the index")
    clear_parser.add_argument("path", help="File path relative to the workspace")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API or MCP server")
    serve_parser.add_argument(
        "--transport",
        choices=["http", "stdio", "sse"],
        default="http",
        help="http for the dashboard API, stdio or sse for MCP (default: http)",
    )

    # info command
    subparsers.add_parser("info", help="Show workspace and database information")

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
    )

    if args.command == "index":
        index(settings, full=args.full, prune=args.prune, timeout=args.timeout)
    elif args.command == "search":
        filters = SearchFilters(
            file_type=args.file_type,
            source_type=args.source_type,
            content_type=args.content_type,
        )
        search(settings, args.query, args.limit, filters)
    elif args.command == "stats":
        stats(settings)
    elif args.command == "activity":
        activity(settings, args.limit)
    elif args.command == "clear":
        clear(settings, args.path)
    elif args.command == "serve":
        serve(settings, args.transport)
    elif args.command == "info":
        info(settings)


if __name__ == "__main__":
    main()
