"""Normalize free-form Python dependency strings to bare package names."""

from __future__ import annotations

from pathlib import Path
from typing import List

# Order matters: markers and space-separated clauses go before operators.
_DELIMITERS = (";", " ", "[", "==", ">", "<", "~=")


def canonicalize(token: str) -> str:
    """Strip version constraints, extras and environment markers from a dependency.

    e.g. "fastapi>=0.1.0" -> "fastapi"
    e.g. "pytest < 5.0.0" -> "pytest"
    e.g. "numpy~=1.19.2" -> "numpy"
    e.g. "django>2.1; os_name != 'nt'" -> "django"
    """
    name = token.lower()
    for delimiter in _DELIMITERS:
        name = name.split(delimiter, 1)[0]
    return name


def read_requirement_tokens(path: Path) -> List[str]:
    """Return the raw dependency tokens of a requirements file, one per non-empty line."""
    tokens: List[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped:
                continue
            tokens.append(stripped)
    return tokens
