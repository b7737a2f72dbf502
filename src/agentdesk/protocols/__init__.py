"""Protocol definitions for extensible components."""

from agentdesk.protocols.chunker import ChunkingStrategy
from agentdesk.protocols.scanner import WorkspaceSource

__all__ = ["ChunkingStrategy", "WorkspaceSource"]
