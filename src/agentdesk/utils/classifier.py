"""Source-type classification of workspace paths."""

from typing import Callable

DEFAULT_SOURCE_TYPE = "workspace"

# Top-level files that hold the agent's long-term memory
MEMORY_FILENAMES = {"memory.md"}


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda path: any(needle in path for needle in needles)


def _is_memory(path: str) -> bool:
    return "memory/" in path or path in MEMORY_FILENAMES


# Evaluated top to bottom; first match wins.
SOURCE_TYPE_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (_is_memory, "memory"),
    (_contains("business_lead"), "business_lead"),
    (_contains("paper_trading", "trading"), "paper_trading"),
    (_contains("task", "todo"), "task"),
    (_contains("calendar", "schedule"), "calendar"),
    (_contains("agent", "soul", "user"), "agent_config"),
)


def classify(relative_path: str) -> str:
    """Map a workspace-relative path to its source type.

    Matching is case-insensitive and never fails: paths that hit no rule
    fall back to ``workspace``.
    """
    path = relative_path.replace("\\", "/").lower()
    for predicate, source_type in SOURCE_TYPE_RULES:
        if predicate(path):
            return source_type
    return DEFAULT_SOURCE_TYPE
