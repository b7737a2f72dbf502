"""Incremental indexing of a workspace into the search store."""

import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agentdesk.activity import ActivityFeed
from agentdesk.chunkers import get_chunker
from agentdesk.config import Settings
from agentdesk.errors import AgentDeskError, NotFoundError
from agentdesk.models import FileEntry, IndexedChunk
from agentdesk.protocols import WorkspaceSource
from agentdesk.scanners import WorkspaceScanner
from agentdesk.storage import WorkspaceStore
from agentdesk.utils.classifier import classify
from agentdesk.utils.text import read_text

logger = logging.getLogger(__name__)

DOCUMENT_CONTENT_TYPE = "document"


@dataclass
class ReindexResult:
    """Counters from one reindex pass. Best effort, not transactional."""

    indexed_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    empty_count: int = 0
    removed_count: int = 0
    chunk_count: int = 0
    timed_out: bool = False
    duration_ms: int = 0

    @property
    def scanned_count(self) -> int:
        return self.indexed_count + self.skipped_count + self.failed_count + self.empty_count

    def to_dict(self) -> dict:
        return {
            "indexedCount": self.indexed_count,
            "skippedCount": self.skipped_count,
            "failedCount": self.failed_count,
            "emptyCount": self.empty_count,
            "removedCount": self.removed_count,
            "chunkCount": self.chunk_count,
            "scannedCount": self.scanned_count,
            "timedOut": self.timed_out,
            "durationMs": self.duration_ms,
        }


def needs_reindex(entry: FileEntry, indexed: dict[str, int]) -> bool:
    """A file is stale when it was never indexed or changed since."""
    last_indexed = indexed.get(entry.path)
    return last_indexed is None or last_indexed < entry.modified_ms


class IncrementalIndexer:
    """Scan -> classify -> chunk -> replace, skipping files that are current.

    Callers must not run two passes over the same workspace at once.
    """

    def __init__(
        self,
        store: WorkspaceStore,
        settings: Optional[Settings] = None,
        scanner: Optional[WorkspaceSource] = None,
        activity: Optional[ActivityFeed] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.scanner = scanner
        self.activity = activity

    def build_chunks(self, entry: FileEntry, content: str) -> list[IndexedChunk]:
        """Classify and chunk one file's content into index entries."""
        source_type = classify(entry.path)
        spans = get_chunker(entry.type, self.settings).chunk(content)

        chunks = []
        for i, span in enumerate(spans):
            title = entry.name if i == 0 else f"{entry.name} (part {i + 1})"
            chunks.append(
                IndexedChunk(
                    content=span.text,
                    title=title,
                    file_path=entry.path,
                    file_type=entry.type,
                    source_type=source_type,
                    line_number=span.line_start,
                    line_end=span.line_end,
                    context=span.context,
                )
            )
        return chunks

    def reindex(
        self,
        root: Optional[Path | str] = None,
        *,
        full: bool = False,
        prune: bool = False,
        timeout: Optional[float] = None,
    ) -> ReindexResult:
        """Bring the index up to date with the files under root.

        Args:
            root: Workspace directory (defaults to the configured one)
            full: Reindex every file regardless of modification time
            prune: Remove index entries for files no longer on disk
            timeout: Seconds after which the pass stops; the rest waits
                for the next pass

        Returns:
            ReindexResult with per-outcome counters
        """
        root_path = Path(root) if root is not None else self.settings.workspace_path
        scanner = self.scanner or WorkspaceScanner()
        if not scanner.can_handle(root_path):
            raise NotFoundError(f"Workspace not found: {root_path}")

        started = time.monotonic()
        deadline = started + timeout if timeout is not None else None
        result = ReindexResult()

        logger.info(f"Scanning {root_path}")
        files = scanner.scan(root_path, deadline)
        result.timed_out = getattr(scanner, "timed_out", False)
        logger.info(f"  Found {len(files)} indexable files")

        # Manual entries share the table but have no file to go stale against
        indexed = {
            f.file_path: f.last_indexed
            for f in self.store.indexed_files(content_type=DOCUMENT_CONTENT_TYPE)
        }
        logger.info(f"  {len(indexed)} files already indexed")

        for entry in files:
            if deadline is not None and time.monotonic() > deadline:
                result.timed_out = True
                logger.warning("Reindex deadline reached, leaving remaining files for next pass")
                break

            if not full and not needs_reindex(entry, indexed):
                result.skipped_count += 1
                continue

            content = read_text(root_path / entry.path)
            if not content.strip():
                result.empty_count += 1
                continue

            try:
                chunks = self.build_chunks(entry, content)
                if chunks:
                    self.store.replace_file_chunks(entry.path, chunks)
                else:
                    self.store.clear_file(entry.path)
            except sqlite3.Error as e:
                logger.error(f"Error indexing {entry.path}: {e}")
                result.failed_count += 1
                continue

            if not chunks:
                result.empty_count += 1
                logger.info(f"  {entry.path} (no chunks)")
                continue

            result.indexed_count += 1
            result.chunk_count += len(chunks)
            logger.info(f"  {entry.path} ({len(chunks)} chunks)")

        if prune:
            if result.timed_out:
                logger.warning("Skipping prune: scan did not finish")
            else:
                result.removed_count = self._prune(indexed, files)

        result.duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Indexed {result.indexed_count} files ({result.chunk_count} chunks), "
            f"skipped {result.skipped_count}, failed {result.failed_count}"
        )
        self._record(root_path, result)
        return result

    def _prune(self, indexed: dict[str, int], files: list[FileEntry]) -> int:
        on_disk = {entry.path for entry in files}
        removed = 0
        for file_path in indexed:
            if file_path in on_disk:
                continue
            try:
                self.store.clear_file(file_path)
            except sqlite3.Error as e:
                logger.error(f"Error removing {file_path} from index: {e}")
                continue
            removed += 1
            logger.info(f"  removed {file_path}")
        return removed

    def _record(self, root: Path, result: ReindexResult) -> None:
        """Log the pass to the activity feed, if one is attached."""
        try:
            self.store.set_metadata("workspace_path", str(root.absolute()))
            self.store.set_metadata("last_reindex", str(self.store.clock()))
            if self.activity is not None:
                self.activity.log(
                    action_type="reindex",
                    description=(
                        f"Indexed {result.indexed_count} files, "
                        f"skipped {result.skipped_count}"
                    ),
                    status="failed" if result.failed_count else "success",
                    metadata={"duration": result.duration_ms, **result.to_dict()},
                    source="system",
                )
        except (sqlite3.Error, AgentDeskError) as e:
            logger.error(f"Could not record reindex pass: {e}")
