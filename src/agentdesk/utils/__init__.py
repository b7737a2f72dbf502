"""Utility functions for agentdesk."""

from agentdesk.utils.classifier import classify
from agentdesk.utils.text import is_binary_content, read_text

__all__ = ["classify", "is_binary_content", "read_text"]
