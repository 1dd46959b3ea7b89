"""Archive operations layer.

This module provides the building blocks of a synchronization run.

Public API:
    Discovery:
        - find_document_ids: Scan workspace files for shared conversation links
        - extract_document_ids: Extract conversation ids from text

    Archive directory:
        - ArchiveStore: Index, write, and delete snapshot files
        - format_snapshot_filename / parse_snapshot_filename: Filename schema

    Snapshot production:
        - SnapshotPipeline: Capture one conversation into a snapshot
        - browser_session: Shared browser for a run
        - load_script_bundle: SingleFile scripts
        - postprocess_snapshot: Text transforms on serialized snapshots

    Execution:
        - run_all: Bounded concurrent capture with failure isolation
"""

from conversation_archive.operations.archive_store import ArchiveStore
from conversation_archive.operations.discovery import extract_document_ids, find_document_ids
from conversation_archive.operations.executor import run_all
from conversation_archive.operations.filenames import (
    format_snapshot_filename,
    parse_snapshot_filename,
    sanitize_title,
)
from conversation_archive.operations.postprocess import postprocess_snapshot
from conversation_archive.operations.scripts import ScriptBundle, load_script_bundle
from conversation_archive.operations.snapshot import SnapshotPipeline, browser_session

__all__ = [
    # Discovery
    "find_document_ids",
    "extract_document_ids",
    # Archive directory
    "ArchiveStore",
    "format_snapshot_filename",
    "parse_snapshot_filename",
    "sanitize_title",
    # Snapshot production
    "SnapshotPipeline",
    "browser_session",
    "ScriptBundle",
    "load_script_bundle",
    "postprocess_snapshot",
    # Execution
    "run_all",
]
