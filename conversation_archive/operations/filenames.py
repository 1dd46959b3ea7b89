"""Snapshot filename schema: ``<id> - <title>.html``."""

import re

DOCUMENT_ID_PATTERN = r"[A-Za-z0-9_-]+"
SEPARATOR = " - "
SNAPSHOT_SUFFIX = ".html"

SNAPSHOT_NAME_RE = re.compile(rf"^(?P<id>{DOCUMENT_ID_PATTERN}){SEPARATOR}(?P<title>.*)\.html$", re.DOTALL)
DOCUMENT_ID_RE = re.compile(rf"^{DOCUMENT_ID_PATTERN}$")
ILLEGAL_FILENAME_CHARS_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')

DEFAULT_MAX_TITLE_BYTES = 100


def is_document_id(value: str) -> bool:
    """Return True if value uses only the document id charset."""
    return bool(DOCUMENT_ID_RE.match(value))


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Truncate text to at most max_bytes UTF-8 bytes without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # A cut in the middle of a multi-byte sequence leaves an incomplete tail, drop it
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_title(title: str, max_bytes: int = DEFAULT_MAX_TITLE_BYTES) -> str:
    """Make a conversation title safe to embed in a filename.

    Strips characters that are illegal in filenames on common platforms
    (including newlines and other control characters), then limits the
    result to ``max_bytes`` encoded bytes.
    """
    cleaned = ILLEGAL_FILENAME_CHARS_RE.sub("", title)
    return truncate_utf8(cleaned, max_bytes)


def format_snapshot_filename(
    document_id: str, title: str, max_title_bytes: int = DEFAULT_MAX_TITLE_BYTES
) -> str:
    """Build the snapshot filename for a document.

    Raises:
        ValueError: If the document id contains characters outside the id charset,
            which would make the filename unparseable.
    """
    if not is_document_id(document_id):
        raise ValueError(f"Invalid document id: {document_id!r}")
    return f"{document_id}{SEPARATOR}{sanitize_title(title, max_title_bytes)}{SNAPSHOT_SUFFIX}"


def parse_snapshot_filename(filename: str) -> tuple[str, str] | None:
    """Split a snapshot filename into (document_id, title).

    Returns None for files that don't follow the snapshot schema. Document ids
    never contain spaces, so the first separator always ends the id.
    """
    match = SNAPSHOT_NAME_RE.match(filename)
    if match is None:
        return None
    return match.group("id"), match.group("title")
