"""Protocol for workspace file sources."""

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from agentdesk.models import FileEntry


@runtime_checkable
class WorkspaceSource(Protocol):
    """Protocol for anything that can list indexable files under a root.

    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source (e.g. 'folder')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this source can list the given root."""
        ...

    def scan(self, root: Path, deadline: Optional[float] = None) -> list[FileEntry]:
        """Return metadata for every indexable file under root."""
        ...
