"""Discovery of shared conversation links in workspace text files."""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

SHARE_LINK_RE = re.compile(
    r"https://(?:gemini\.google\.com|g\.co/gemini)/share/(?P<id>[A-Za-z0-9_-]+)"
)


def extract_document_ids(text: str) -> set[str]:
    """Return the ids of every shared conversation linked from text."""
    return {match.group("id") for match in SHARE_LINK_RE.finditer(text)}


def find_document_ids(
    root: Path,
    pattern: str = "**/*.md",
    exclude: Iterable[Path] = (),
) -> set[str]:
    """Scan source files under root for shared conversation links.

    Args:
        root: Workspace root directory
        pattern: Glob pattern (relative to root) selecting files to scan
        exclude: Directories whose files are skipped

    Returns:
        Set of document ids referenced anywhere in the matching files
    """
    excluded = [Path(p).resolve() for p in exclude]
    ids: set[str] = set()

    for path in sorted(Path(root).glob(pattern)):
        if not path.is_file():
            continue
        resolved = path.resolve()
        if any(resolved.is_relative_to(directory) for directory in excluded):
            continue

        text = path.read_text(encoding="utf-8", errors="replace")
        found = extract_document_ids(text)
        if found:
            logger.debug(f"Found {len(found)} conversation links in {path}")
        ids |= found

    return ids
