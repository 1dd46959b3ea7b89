"""Snapshot archive directory access."""

import logging
from pathlib import Path

from atomicwrites import atomic_write

from conversation_archive.domain.errors import ArchiveStoreError
from conversation_archive.domain.models import Snapshot, SnapshotEntry
from conversation_archive.operations.filenames import parse_snapshot_filename

logger = logging.getLogger(__name__)


class ArchiveStore:
    """Reads and mutates the directory of ``<id> - <title>.html`` snapshots.

    The directory itself is the only persisted state: the index is rebuilt
    from filenames every time it is requested.

    Example:
        store = ArchiveStore("conversations")
        for document_id, filename in store.list_snapshots().items():
            ...
    """

    def __init__(self, directory: str | Path):
        """Initialize the store.

        Args:
            directory: Archive directory containing snapshot files
        """
        self.directory = Path(directory)

    def list_snapshots(self) -> dict[str, str]:
        """Index the archive directory.

        Returns:
            Dictionary mapping document ids to snapshot filenames. Files that
            don't match the snapshot schema are ignored. Empty if the directory
            doesn't exist yet.

        Raises:
            ArchiveStoreError: If the directory cannot be read
        """
        index: dict[str, str] = {}

        try:
            names = sorted(p.name for p in self.directory.iterdir() if p.is_file())
        except FileNotFoundError:
            logger.debug(f"Archive directory {self.directory} does not exist yet")
            return index
        except OSError as e:
            raise ArchiveStoreError(f"Failed to read archive directory {self.directory}: {e}") from e

        for name in names:
            parsed = parse_snapshot_filename(name)
            if parsed is None:
                logger.debug(f"Ignoring non-snapshot file {name}")
                continue
            document_id, _title = parsed
            if document_id in index:
                logger.warning(
                    f"Multiple snapshots for {document_id}: keeping {index[document_id]}, ignoring {name}"
                )
                continue
            index[document_id] = name

        return index

    def create_directory(self) -> None:
        """Create the archive directory if it doesn't exist."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveStoreError(f"Failed to create archive directory {self.directory}: {e}") from e

    def entries(self) -> list[SnapshotEntry]:
        """Return every indexed snapshot with its title and size."""
        entries = []
        for document_id, filename in self.list_snapshots().items():
            parsed = parse_snapshot_filename(filename)
            title = parsed[1] if parsed else ""
            try:
                size = (self.directory / filename).stat().st_size
            except OSError:
                size = 0
            entries.append(
                SnapshotEntry(document_id=document_id, filename=filename, title=title, size=size)
            )
        return entries

    def write(self, filename: str, content: bytes) -> int:
        """Atomically write a snapshot file.

        The content lands in a temporary file that is renamed into place, so a
        failed write never leaves a partial snapshot behind.

        Args:
            filename: Snapshot filename (no directory components)
            content: File content

        Returns:
            Number of bytes written

        Raises:
            ArchiveStoreError: If the file cannot be written
        """
        path = self.directory / filename
        if path.parent != self.directory:
            raise ArchiveStoreError(f"Refusing to write {filename}: outside {self.directory}")

        try:
            with atomic_write(path, mode="wb", overwrite=True) as f:
                f.write(content)
        except OSError as e:
            raise ArchiveStoreError(f"Failed to write snapshot {path}: {e}") from e

        logger.debug(f"Wrote {len(content)} bytes to {path}")
        return len(content)

    def save_snapshot(self, document_id: str, snapshot: Snapshot) -> int:
        """Persist a captured snapshot (executor sink)."""
        logger.debug(f"Saving snapshot for {document_id} as {snapshot.filename}")
        return self.write(snapshot.filename, snapshot.content)

    def delete(self, filename: str) -> bool:
        """Delete a snapshot file.

        Args:
            filename: Snapshot filename

        Returns:
            True if a file was removed, False if it didn't exist

        Raises:
            ArchiveStoreError: If the file exists but cannot be removed
        """
        path = self.directory / filename
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ArchiveStoreError(f"Failed to delete snapshot {path}: {e}") from e

        logger.debug(f"Deleted {path}")
        return True
