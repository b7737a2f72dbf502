"""Network surfaces for agentdesk (HTTP and MCP)."""

from agentdesk.server.http_app import create_app
from agentdesk.server.mcp_server import create_mcp_server

__all__ = ["create_app", "create_mcp_server"]
