"""Persistent storage for agentdesk."""

from agentdesk.storage.store import WorkspaceStore, now_ms

__all__ = ["WorkspaceStore", "now_ms"]
