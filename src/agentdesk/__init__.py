"""agentdesk - workspace indexing and activity backend for an agent dashboard."""

__version__ = "0.1.0"
