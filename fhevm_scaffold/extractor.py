"""Recover the primary declared type name from contract source text."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from .errors import ExtractionFailedError

# Top-level declarations start at column 0. Only the first one is used, so a
# helper interface declared above the main contract wins.
_DECLARATION_RE = re.compile(
    r"^(?:abstract\s+)?(?:contract|interface|library)\s+"
    r"([A-Za-z_$][A-Za-z0-9_$]*)\s*(?:is\s+\S|\{)",
    re.MULTILINE,
)


def extract_type_name(source_text: str) -> Optional[str]:
    """Return the first top-level declared type name, or None when absent."""
    match = _DECLARATION_RE.search(source_text)
    return match.group(1) if match else None


def read_type_name(path: Path) -> str:
    """Read a contract file and return its declared type name.

    Bytes outside UTF-8 are replaced; only the ASCII declaration line matters.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    name = extract_type_name(text)
    if name is None:
        raise ExtractionFailedError(f"Could not find a contract declaration in {path}")
    return name


__all__ = ["extract_type_name", "read_type_name"]
