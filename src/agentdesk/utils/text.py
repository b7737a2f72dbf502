"""Reading workspace files as text."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect binary content by null bytes and the share of control bytes.

    Bytes >= 0x80 are treated as text so UTF-8 documents are not rejected.
    """
    if not content:
        return False

    sample = content[:sample_size]
    if b"\x00" in sample:
        return True

    control = sum(1 for byte in sample if byte < 32 and byte not in (9, 10, 12, 13))
    return (control / len(sample)) > 0.30


def read_text(path: Path | str) -> str:
    """Read a file as UTF-8 text.

    Unreadable, binary and undecodable files are logged and read as "".
    """
    full_path = Path(path)
    try:
        raw = full_path.read_bytes()
    except OSError as e:
        logger.warning(f"Error reading file {full_path}: {e}")
        return ""

    if is_binary_content(raw):
        logger.warning(f"Skipping binary content in {full_path}")
        return ""

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Cannot decode {full_path} as UTF-8: {e}")
        return ""


def count_lines(content: str) -> int:
    """Line count as reported by the index listing (split on newlines)."""
    return len(content.split("\n"))
