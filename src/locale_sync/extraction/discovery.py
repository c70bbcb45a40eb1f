"""Glob-based discovery of source files to scan for translatable strings."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Directories to exclude from discovery
EXCLUDED_DIRS = {
    "__pycache__",
    ".git",
    ".pytest_cache",
    "node_modules",
    "dist",
    "build",
    "venv",
    ".venv",
}

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """
    Expand ``{a,b}`` alternatives in a glob pattern.

    Examples:
        >>> expand_braces("src/**/*.{ts,tsx}")
        ['src/**/*.ts', 'src/**/*.tsx']
    """
    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]

    expanded: list[str] = []
    for option in match.group(1).split(","):
        candidate = pattern[: match.start()] + option + pattern[match.end() :]
        expanded.extend(expand_braces(candidate))
    return expanded


def discover_source_files(
    globs: Iterable[str],
    root: Path = Path("."),
    exclude_dirs: set[str] | None = None,
) -> list[Path]:
    """
    Find all files matching any of the glob patterns.

    Args:
        globs: Glob patterns relative to ``root`` (``**`` and ``{a,b}`` allowed)
        root: Directory the patterns are resolved against
        exclude_dirs: Directory names to skip (defaults to EXCLUDED_DIRS)

    Returns:
        Unique matching file paths sorted alphabetically
    """
    if exclude_dirs is None:
        exclude_dirs = EXCLUDED_DIRS

    found: set[Path] = set()
    for pattern in globs:
        for expanded in expand_braces(pattern):
            for path in root.glob(expanded):
                relative_parts = path.relative_to(root).parts
                if any(part in exclude_dirs for part in relative_parts):
                    continue
                if path.is_file():
                    found.add(path)

    logger.debug(f"Discovered {len(found)} source file(s) under {root}")
    return sorted(found)
