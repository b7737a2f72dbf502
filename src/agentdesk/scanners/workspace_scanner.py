"""Scanner for a local workspace folder."""

import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from agentdesk.models import FileEntry

logger = logging.getLogger(__name__)

INDEXABLE_EXTENSIONS = {".md", ".csv", ".txt", ".json"}

SKIP_DIRS = {
    "node_modules",
    "dist",
    "build",
    "__pycache__",
    "venv",
    "env",
    "target",
}


class WorkspaceScanner:
    """Lists indexable files under a local folder, depth first."""

    source_type = "folder"

    def __init__(self, extensions: Optional[set[str]] = None):
        self.extensions = extensions or INDEXABLE_EXTENSIONS
        self.timed_out = False

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def scan(self, root: Path, deadline: Optional[float] = None) -> list[FileEntry]:
        """Return metadata for every indexable file under root.

        Args:
            root: Workspace directory
            deadline: ``time.monotonic()`` value after which scanning stops

        Returns:
            FileEntry objects in no particular order
        """
        self.timed_out = False
        root = Path(root)
        entries: list[FileEntry] = []
        self._scan_dir(root, root, entries, deadline)
        return entries

    def _scan_dir(
        self,
        directory: Path,
        root: Path,
        entries: list[FileEntry],
        deadline: Optional[float],
    ) -> None:
        if deadline is not None and time.monotonic() > deadline:
            self.timed_out = True
            return

        try:
            with os.scandir(directory) as it:
                items = list(it)
        except OSError as e:
            logger.error(f"Error scanning directory {directory}: {e}")
            return

        for item in items:
            if self._should_skip(item.name):
                continue

            try:
                if item.is_dir(follow_symlinks=False):
                    self._scan_dir(Path(item.path), root, entries, deadline)
                    continue
                if not item.is_file():
                    continue

                ext = os.path.splitext(item.name)[1].lower()
                if ext not in self.extensions:
                    continue

                stat = item.stat()
            except OSError as e:
                logger.error(f"Error reading entry {item.path}: {e}")
                continue

            rel_path = Path(item.path).relative_to(root).as_posix()
            entries.append(
                FileEntry(
                    path=rel_path,
                    name=item.name,
                    type=ext.lstrip("."),
                    size=stat.st_size,
                    modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                )
            )

    @staticmethod
    def _should_skip(name: str) -> bool:
        """Skip hidden entries and build/dependency folders."""
        return name.startswith(".") or name in SKIP_DIRS
