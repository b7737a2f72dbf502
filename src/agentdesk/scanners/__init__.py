"""Workspace sources for agentdesk."""

from agentdesk.scanners.workspace_scanner import (
    INDEXABLE_EXTENSIONS,
    SKIP_DIRS,
    WorkspaceScanner,
)

__all__ = ["INDEXABLE_EXTENSIONS", "SKIP_DIRS", "WorkspaceScanner"]
